from __future__ import annotations

import re
from functools import lru_cache

from quickmatch.models import (
    BUFFER,
    MATCH,
    NEW_WORD,
    NO_MATCH,
    TRAILING,
    TRAILING_BUT_STARTED,
    MatchPart,
    ScoreArray,
)


@lru_cache(maxsize=1024)
def _subsequence_pattern(query: str) -> re.Pattern[str]:
    return re.compile(
        ".*?".join(re.escape(char) for char in query),
        re.IGNORECASE | re.DOTALL,
    )


@lru_cache(maxsize=1024)
def _char_pattern(char: str) -> re.Pattern[str]:
    return re.compile(re.escape(char), re.IGNORECASE)


def can_match(query: str, candidate: str) -> bool:
    """Check whether the query characters occur in the candidate, in order, ignoring case."""
    if len(query) > len(candidate):
        return False
    return _subsequence_pattern(query).search(candidate) is not None


def letter_scores(query: str, candidate: str) -> ScoreArray:
    """Score every character of the candidate against a greedy left-to-right match.

    Returns ``[NO_MATCH]`` when some query character cannot be found.
    """
    scores: ScoreArray = []
    cursor = -1
    started = False

    for char in query:
        found = _char_pattern(char).search(candidate, cursor + 1)
        if found is None:
            return [NO_MATCH]
        index = found.start()
        gap = index - cursor - 1
        if index == 0:
            started = True

        if gap > 0 and candidate[index - 1].isspace():
            scores.extend([BUFFER] * (gap - 1))
            scores.append(NEW_WORD)
        elif candidate[index].isupper():
            scores.extend([BUFFER] * gap)
        else:
            scores.extend([NO_MATCH] * gap)
        scores.append(MATCH)
        cursor = index

    trailing = TRAILING_BUT_STARTED if started else TRAILING
    scores.extend([trailing] * (len(candidate) - cursor - 1))
    return scores


def _mean(values: ScoreArray) -> float:
    return sum(values) / len(values)


def _feasible_scores(query: str, candidate: str) -> ScoreArray | None:
    if not can_match(query, candidate):
        return None
    scores = letter_scores(query, candidate)
    if len(scores) != len(candidate):
        return None
    return scores


def score(query: str, candidate: str) -> float:
    """Return 0.0 for a perfect match, 1.0 for no match; lower is better."""
    if not query:
        return TRAILING
    scores = _feasible_scores(query, candidate)
    if scores is None:
        return NO_MATCH
    return _mean(scores)


def split_parts(candidate: str, scores: ScoreArray) -> list[MatchPart]:
    parts: list[MatchPart] = []
    start = 0
    for index in range(1, len(scores) + 1):
        if index == len(scores) or (scores[index] == MATCH) != (
            scores[start] == MATCH
        ):
            parts.append(
                MatchPart(candidate[start:index], match=scores[start] == MATCH)
            )
            start = index
    return parts


def score_with_parts(query: str, candidate: str) -> tuple[float, list[MatchPart]]:
    """Score the candidate and split it into matched and unmatched runs.

    Joining the texts of the returned parts always gives back the candidate.
    """
    if not query:
        return TRAILING, [MatchPart(candidate)]
    scores = _feasible_scores(query, candidate)
    if scores is None:
        return NO_MATCH, [MatchPart(candidate)]
    return _mean(scores), split_parts(candidate, scores)
