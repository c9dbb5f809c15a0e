"""Tests for edit distance, similarity and best-match selection."""

import pytest

from vehicle_validation.services.catalog import VEHICLE_CATALOG
from vehicle_validation.services.fuzzy import best_match, levenshtein, similarity

WORDS = ["", "a", "Myvi", "myvee", "HR-V", "hrv", "Mercedes-Benz", "kitten", "sitting"]

# ---------------------------------------------------------------------------
# Levenshtein
# ---------------------------------------------------------------------------


class TestLevenshtein:
    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_case_insensitive(self):
        assert levenshtein("PERODUA", "perodua") == 0

    def test_empty_strings(self):
        assert levenshtein("", "") == 0
        assert levenshtein("", "abc") == 3
        assert levenshtein("abcd", "") == 4

    def test_insertion_and_substitution(self):
        assert levenshtein("Myvi", "myvee") == 2
        assert levenshtein("perdua", "Perodua") == 1

    @pytest.mark.parametrize("word", WORDS)
    def test_identity_is_zero(self, word):
        assert levenshtein(word, word) == 0

    @pytest.mark.parametrize("a", WORDS)
    @pytest.mark.parametrize("b", WORDS)
    def test_symmetric(self, a, b):
        assert levenshtein(a, b) == levenshtein(b, a)


# ---------------------------------------------------------------------------
# Similarity
# ---------------------------------------------------------------------------


class TestSimilarity:
    def test_both_empty_is_one(self):
        assert similarity("", "") == 1

    def test_against_empty_is_zero(self):
        assert similarity("abc", "") == 0

    def test_one_edit_in_seven(self):
        assert similarity("perdua", "Perodua") == pytest.approx(1 - 1 / 7)

    @pytest.mark.parametrize("a", WORDS)
    @pytest.mark.parametrize("b", WORDS)
    def test_symmetric_and_bounded(self, a, b):
        score = similarity(a, b)
        assert score == similarity(b, a)
        assert 0 <= score <= 1


# ---------------------------------------------------------------------------
# Best match
# ---------------------------------------------------------------------------


class TestBestMatch:
    def test_empty_input_short_circuits(self):
        result = best_match("", list(VEHICLE_CATALOG))
        assert result.match == ""
        assert result.score == 0

    def test_empty_input_with_empty_candidates(self):
        result = best_match("", [])
        assert (result.match, result.score) == ("", 0)

    def test_no_candidates(self):
        result = best_match("Toyota", [])
        assert (result.match, result.score) == ("", 0)

    def test_exact_match_scores_one(self):
        result = best_match("honda", list(VEHICLE_CATALOG))
        assert result.match == "Honda"
        assert result.score == 1

    def test_typo_resolves_to_closest(self):
        result = best_match("perdua", list(VEHICLE_CATALOG))
        assert result.match == "Perodua"
        assert result.score == pytest.approx(6 / 7)

    def test_tie_keeps_first_listed(self):
        assert best_match("ab", ["ax", "ay"]).match == "ax"
        assert best_match("ab", ["ay", "ax"]).match == "ay"

    def test_returns_something_even_for_poor_input(self):
        result = best_match("zzzzzzzz", list(VEHICLE_CATALOG))
        assert result.match in VEHICLE_CATALOG
        assert result.score < 0.5
