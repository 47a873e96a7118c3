from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Generic, TypeVar

T = TypeVar("T")

# MATCH must differ from every other value; parts are split on it.
MATCH = 0.00
NEW_WORD = 0.01
TRAILING_BUT_STARTED = 0.10
BUFFER = 0.15
TRAILING = 0.20
NO_MATCH = 1.00

ScoreArray = list[float]


@dataclass(frozen=True)
class MatchPart:
    """A run of candidate text and whether the query matched it directly."""

    text: str
    match: bool = False

    def __str__(self) -> str:
        return self.text

    def to_html(self) -> str:
        text = escape(self.text, quote=False)
        if self.match:
            return f"<span class='match'>{text}</span>"
        return text

    def to_ascii(self) -> str:
        if self.match:
            return f"_{self.text}_"
        return self.text

    def as_dict(self) -> dict[str, str | bool]:
        return {"t": self.text, "m": self.match}


@dataclass(frozen=True)
class MatchResult(Generic[T]):
    item: T
    text: str
    score: float
    parts: tuple[MatchPart, ...]
