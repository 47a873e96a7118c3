from __future__ import annotations

import json
import logging
import sys
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from quickmatch import __version__
from quickmatch.models import MatchResult
from quickmatch.ranking import results_by_score
from quickmatch.rendering import format_score, to_ascii, to_html, to_rich_text
from quickmatch.tui import QuickOpenPicker

__all__ = [
    "QuickOpenPicker",
    "cli",
    "pick",
    "rank",
]

logger = logging.getLogger("quickmatch")


class OutputFormat(str, Enum):
    plain = "plain"
    ascii = "ascii"
    html = "html"
    json = "json"
    rich = "rich"


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"quickmatch {__version__}")
    raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_candidates(
    candidates: list[str] | None,
    input_path: Path | None,
    *,
    allow_stdin: bool = True,
) -> list[str]:
    if candidates:
        return list(candidates)
    if input_path is not None:
        try:
            lines = input_path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc
    elif allow_stdin:
        lines = sys.stdin.read().splitlines()
    else:
        lines = []
    return [line for line in lines if line.strip()]


def _require_candidates(candidates: list[str]) -> None:
    if not candidates:
        typer.echo("No candidates to match against.", err=True)
        raise typer.Exit(code=1)


def _format_result(result: MatchResult[str], output_format: OutputFormat) -> str:
    if output_format is OutputFormat.ascii:
        return to_ascii(result.parts)
    if output_format is OutputFormat.html:
        return to_html(result.parts)
    if output_format is OutputFormat.json:
        return json.dumps(
            {
                "text": result.text,
                "score": result.score,
                "parts": [part.as_dict() for part in result.parts],
            },
            separators=(",", ":"),
        )
    return result.text


cli = typer.Typer(
    add_completion=False,
    help="Rank candidate strings against a short query, quick-open style.",
)

THRESHOLD_OPTION = typer.Option(
    1.0,
    "--threshold",
    "-t",
    min=0.0,
    max=1.0,
    envvar="QUICKMATCH_THRESHOLD",
    help="Drop candidates scoring at or above this value (lower is better).",
)
INPUT_OPTION = typer.Option(
    None,
    "--input",
    "-i",
    dir_okay=False,
    help="Read candidates from this file, one per line.",
)


@cli.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr."
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    _configure_logging(verbose)


@cli.command()
def rank(
    query: str = typer.Argument(..., help="The text typed by the user."),
    candidates: list[str] | None = typer.Argument(
        None, help="Candidates to rank. Read from --input or stdin when omitted."
    ),
    input_path: Path | None = INPUT_OPTION,
    threshold: float = THRESHOLD_OPTION,
    output_format: OutputFormat = typer.Option(
        OutputFormat.plain, "--format", "-f", help="How to render each match."
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Show at most this many matches."
    ),
    scores: bool = typer.Option(
        False, "--scores", "-s", help="Prefix each match with its score."
    ),
) -> None:
    """Print the matching candidates, best first."""
    pool = _read_candidates(candidates, input_path)
    _require_candidates(pool)

    results = results_by_score(query, pool, threshold=threshold)
    if limit is not None:
        results = results[:limit]
    logger.debug("Showing %d matches for %r", len(results), query)

    console = Console(highlight=False)
    for result in results:
        if output_format is OutputFormat.rich:
            line = to_rich_text(result.parts)
            if scores:
                line = Text.assemble((f"{format_score(result.score)}\t", "dim"), line)
            console.print(line, soft_wrap=True)
            continue
        rendered = _format_result(result, output_format)
        if scores and output_format is not OutputFormat.json:
            rendered = f"{format_score(result.score)}\t{rendered}"
        typer.echo(rendered)


@cli.command()
def pick(
    candidates: list[str] | None = typer.Argument(
        None, help="Candidates to pick from. Read from --input when omitted."
    ),
    input_path: Path | None = INPUT_OPTION,
    threshold: float = THRESHOLD_OPTION,
    query: str = typer.Option("", "--query", "-q", help="Initial filter text."),
    scores: bool = typer.Option(
        False, "--scores", "-s", help="Show the score next to each candidate."
    ),
) -> None:
    """Open an interactive quick-open picker and print the chosen candidate."""
    # The picker owns the terminal, so stdin is not a candidate source here.
    pool = _read_candidates(candidates, input_path, allow_stdin=False)
    _require_candidates(pool)

    chosen = QuickOpenPicker(
        pool, query=query, threshold=threshold, show_scores=scores
    ).run()
    if chosen is None:
        raise typer.Exit(code=1)
    typer.echo(chosen)


if __name__ == "__main__":
    cli()
