from __future__ import annotations

import json
from collections.abc import Iterable

from rich.text import Text

from quickmatch.models import MatchPart


def format_score(value: float) -> str:
    return f"{value:.2f}"


def to_plain(parts: Iterable[MatchPart]) -> str:
    return "".join(part.text for part in parts)


def to_ascii(parts: Iterable[MatchPart]) -> str:
    return "".join(part.to_ascii() for part in parts)


def to_html(parts: Iterable[MatchPart]) -> str:
    return "".join(part.to_html() for part in parts)


def to_json(parts: Iterable[MatchPart]) -> str:
    """Serialize parts as a terse payload, e.g. ``[{"t":"re","m":true}]``."""
    return json.dumps([part.as_dict() for part in parts], separators=(",", ":"))


def to_rich_text(
    parts: Iterable[MatchPart],
    *,
    match_style: str = "bold red",
    style: str = "",
) -> Text:
    text = Text(style=style)
    for part in parts:
        text.append(part.text, style=match_style if part.match else None)
    return text
