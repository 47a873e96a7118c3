from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from quickmatch.models import NO_MATCH, MatchPart, MatchResult
from quickmatch.search import score, score_with_parts

logger = logging.getLogger(__name__)

T = TypeVar("T")


def sorted_with_scores(
    query: str, candidates: Iterable[str], threshold: float = 1.0
) -> list[tuple[float, str]]:
    """Return ``(score, candidate)`` pairs below the threshold, best first.

    Non-matching candidates are never returned, whatever the threshold.
    """
    if not query:
        return []

    scored_results: list[tuple[float, str]] = []
    considered = 0
    for candidate in candidates:
        considered += 1
        value = score(query, candidate)
        if value < min(threshold, NO_MATCH):
            scored_results.append((value, candidate))

    scored_results.sort()
    logger.debug(
        "Ranked %d of %d candidates for %r", len(scored_results), considered, query
    )
    return scored_results


def results_by_score(
    query: str,
    items: Iterable[T],
    key: Callable[[T], str] = str,
    threshold: float = 1.0,
) -> list[MatchResult[T]]:
    """Match the query against the text ``key`` extracts from each item.

    Items are wrapped in a ``MatchResult`` rather than modified. Non-matching
    items (score of 1.0) are never included.
    """
    results: list[MatchResult[T]] = []
    considered = 0
    for item in items:
        considered += 1
        text = key(item)
        value, parts = score_with_parts(query, text)
        if value < min(threshold, NO_MATCH):
            results.append(
                MatchResult(item=item, text=text, score=value, parts=tuple(parts))
            )

    results.sort(key=lambda result: (result.score, result.text))
    logger.debug(
        "Ranked %d of %d items for %r", len(results), considered, query
    )
    return results


def parts_by_score(
    query: str, candidates: Iterable[str], threshold: float = 1.0
) -> list[list[MatchPart]]:
    """Return the matched parts of each candidate below the threshold, best first."""
    return [
        list(result.parts)
        for result in results_by_score(query, candidates, threshold=threshold)
    ]
