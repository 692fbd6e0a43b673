# -*- coding: utf-8 -*-
"""
Testes unitários para fuzzy_matcher.py.
"""

import pytest

from chatmark.utils.fuzzy_matcher import (
    calculate_similarity,
    is_fuzzy_match,
    levenshtein_distance,
)


class TestLevenshteinDistance:

    @pytest.mark.parametrize("s1,s2,expected", [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("flaw", "lawn", 2),
    ])
    def test_distance(self, s1, s2, expected):
        assert levenshtein_distance(s1, s2) == expected


class TestCalculateSimilarity:

    def test_equal_strings(self):
        assert calculate_similarity("abc", "abc") == 1.0

    def test_empty_string(self):
        assert calculate_similarity("", "abc") == 0.0

    def test_one_edit(self):
        assert calculate_similarity("hello", "helo") == pytest.approx(0.8)


class TestIsFuzzyMatch:

    def test_blank_keyword_matches_everything(self):
        assert is_fuzzy_match("anything", "   ")

    def test_blank_text_matches_nothing(self):
        assert not is_fuzzy_match("", "abc")

    def test_containment_ignores_case(self):
        assert is_fuzzy_match("Conversa sobre Python", "python")

    def test_threshold(self):
        assert is_fuzzy_match("hello", "helo")
        assert not is_fuzzy_match("hello", "helo", threshold=0.9)
