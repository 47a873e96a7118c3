from __future__ import annotations

from quickmatch.models import MatchPart, MatchResult
from quickmatch.ranking import parts_by_score, results_by_score, sorted_with_scores
from quickmatch.search import can_match, letter_scores, score, score_with_parts

__version__ = "0.6.0"

__all__ = [
    "MatchPart",
    "MatchResult",
    "__version__",
    "can_match",
    "letter_scores",
    "parts_by_score",
    "results_by_score",
    "score",
    "score_with_parts",
    "sorted_with_scores",
]
