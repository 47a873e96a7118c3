import pytest

from quickmatch.models import (
    BUFFER,
    MATCH,
    NEW_WORD,
    NO_MATCH,
    TRAILING,
    TRAILING_BUT_STARTED,
    MatchPart,
)
from quickmatch.search import can_match, letter_scores, score, score_with_parts

SENTINELS = {MATCH, NEW_WORD, TRAILING_BUT_STARTED, BUFFER, TRAILING, NO_MATCH}

PAIRS = [
    ("re", "regards.txt"),
    ("re", "Preview.jpg"),
    ("re", "prime-finder.rb"),
    ("foobar", "FooBar"),
    ("foobar", "Foo Bar"),
    ("foobar", "For the Love of Big Cars"),
    ("foov", "A Fool in Love"),
    ("s.com", "scottadams@aol.com"),
    ("s.com", "lateshow@pipeline.com"),
    ("b", "a b"),
    ("a", " a"),
    ("ab", "a\nb"),
    ("RGD", "regards.txt"),
    ("x", "x"),
    ("a b", "a b"),
    ("foo bar", "foo bar"),
    ("o b", "foo bar"),
    ("f b", "foo  bar"),
]


def test_letter_score_values_are_distinct() -> None:
    assert len(SENTINELS) == 6


def test_documented_reference_scores() -> None:
    assert score("re", "regards.txt") == pytest.approx(0.082, abs=1e-3)
    assert score("re", "preview.jpg") == pytest.approx(0.236, abs=1e-3)
    assert score("s.com", "scottadams@aol.com") == pytest.approx(13 / 18)
    assert score("s.com", "lateshow@pipeline.com") == pytest.approx(16 / 21)


def test_query_longer_than_candidate_is_no_match() -> None:
    assert score("re", "no") == NO_MATCH
    assert score("abc", "ab") == NO_MATCH
    assert score("a", "") == NO_MATCH


def test_score_with_parts_splits_preview() -> None:
    value, parts = score_with_parts("re", "Preview.jpg")

    assert f"{value:.2f}" == "0.24"
    assert parts == [
        MatchPart("P", False),
        MatchPart("re", True),
        MatchPart("view.jpg", False),
    ]


def test_empty_query_scores_trailing_with_single_unmatched_part() -> None:
    for candidate in ["", "abc", "Preview.jpg"]:
        assert score("", candidate) == TRAILING
        assert score_with_parts("", candidate) == (TRAILING, [MatchPart(candidate)])


def test_infeasible_query_returns_whole_candidate_unmatched() -> None:
    assert score_with_parts("zz", "Preview.jpg") == (
        NO_MATCH,
        [MatchPart("Preview.jpg")],
    )
    assert score_with_parts("a", "") == (NO_MATCH, [MatchPart("")])


def test_camel_case_match_beats_scattered_match() -> None:
    camel = score("foobar", "FooBar")
    spaced = score("foobar", "Foo Bar")
    scattered = score("foobar", "For the Love of Big Cars")

    assert camel == 0.0
    assert camel < spaced < scattered
    assert score("fb", "FooBar") < score("fb", "Foobar")


def test_word_start_scores_better_than_mid_word() -> None:
    assert letter_scores("b", "a b") == [BUFFER, NEW_WORD, MATCH]
    assert letter_scores("b", "aab") == [NO_MATCH, NO_MATCH, MATCH]
    assert score("b", "a b") < score("b", "aab")


def test_whitespace_rule_looks_back_and_uppercase_rule_looks_at_match() -> None:
    # "B" follows "o", so only the uppercase rule applies.
    assert letter_scores("fb", "FooBar") == [
        MATCH,
        BUFFER,
        BUFFER,
        MATCH,
        TRAILING_BUT_STARTED,
        TRAILING_BUT_STARTED,
    ]
    # The space before "b" wins even though "b" is lowercase.
    assert letter_scores("fb", "foo bar") == [
        MATCH,
        BUFFER,
        BUFFER,
        NEW_WORD,
        MATCH,
        TRAILING_BUT_STARTED,
        TRAILING_BUT_STARTED,
    ]


def test_letter_scores_trailing_depends_on_match_at_start() -> None:
    assert letter_scores("re", "regards.txt") == [MATCH, MATCH] + [
        TRAILING_BUT_STARTED
    ] * 9
    assert letter_scores("re", "Preview.jpg") == [NO_MATCH, MATCH, MATCH] + [
        TRAILING
    ] * 8


def test_letter_scores_edge_cases() -> None:
    assert letter_scores("", "") == []
    assert letter_scores("", "abc") == [TRAILING, TRAILING, TRAILING]
    assert letter_scores("x", "abc") == [NO_MATCH]
    assert letter_scores("a", " a") == [NEW_WORD, MATCH]
    assert letter_scores("a", "a ") == [MATCH, TRAILING_BUT_STARTED]


def test_scattered_parts_follow_first_occurrence() -> None:
    _, parts = score_with_parts("foobar", "For the Love of Big Cars")

    assert "".join(part.to_ascii() for part in parts) == (
        "_Fo_r the L_o_ve of _B_ig C_ar_s"
    )


@pytest.mark.parametrize(
    ("query", "candidate", "expected"),
    [
        ("rgd", "regards.txt", True),
        ("RGD", "regards.txt", True),
        ("dr", "regards.txt", False),
        ("", "", True),
        ("", "abc", True),
        ("ab", "a", False),
        ("a.c", "abc", False),
        ("a.c", "xa.yc", True),
        ("ab", "a\nb", True),
        ("é", "CAFÉ", True),
        ("(", "f(x)", True),
    ],
)
def test_can_match(query: str, candidate: str, expected: bool) -> None:
    assert can_match(query, candidate) is expected


@pytest.mark.parametrize(("query", "candidate"), PAIRS)
def test_parts_partition_candidate_and_spell_query(query: str, candidate: str) -> None:
    assert can_match(query, candidate)

    value, parts = score_with_parts(query, candidate)
    values = letter_scores(query, candidate)

    assert 0.0 <= value < NO_MATCH
    assert value == pytest.approx(sum(values) / len(values))
    assert len(values) == len(candidate)
    assert set(values) <= SENTINELS
    assert "".join(part.text for part in parts) == candidate
    assert all(part.text for part in parts)
    assert all(a.match != b.match for a, b in zip(parts, parts[1:]))
    matched = "".join(part.text for part in parts if part.match)
    assert matched.lower() == query.lower()


def test_scores_are_deterministic() -> None:
    for query, candidate in PAIRS:
        assert score(query, candidate) == score(query, candidate)
        assert score_with_parts(query, candidate) == score_with_parts(
            query, candidate
        )


def test_query_whitespace_matching_candidate_whitespace_scores_as_match() -> None:
    assert letter_scores("a b", "a b") == [MATCH, MATCH, MATCH]
    assert letter_scores("o b", "foo bar") == [
        NO_MATCH,
        MATCH,
        NO_MATCH,
        MATCH,
        MATCH,
        TRAILING,
        TRAILING,
    ]
    assert score("foo bar", "foo bar") == 0.0
    assert score_with_parts("foo bar", "foo bar") == (
        0.0,
        [MatchPart("foo bar", True)],
    )


def test_word_start_bonus_needs_skipped_characters() -> None:
    assert letter_scores("f b", "foo  bar") == [
        MATCH,
        NO_MATCH,
        NO_MATCH,
        MATCH,
        NEW_WORD,
        MATCH,
        TRAILING_BUT_STARTED,
        TRAILING_BUT_STARTED,
    ]


@pytest.mark.parametrize(("query", "candidate"), PAIRS)
def test_score_agrees_with_score_with_parts(query: str, candidate: str) -> None:
    assert score(query, candidate) == score_with_parts(query, candidate)[0]
