# -*- coding: utf-8 -*-
"""
Testes de destaque de busca: ranges nunca cortam spans inline.
"""

from chatmark.parsing.document_builder import build
from chatmark.parsing.inline_resolver import resolve
from chatmark.search.highlighter import (
    SearchHit,
    find_highlight_ranges,
    message_matches,
    search_document,
)


class TestFindHighlightRanges:

    def test_inside_content_and_outside_spans(self):
        text = "veja **busca** e busca"
        assert find_highlight_ranges(text, "busca", resolve(text)) == [(7, 12), (17, 22)]

    def test_crossing_delimiter_is_rejected(self):
        text = "a**b**c"
        assert find_highlight_ranges(text, "a**b", resolve(text)) == []

    def test_case_insensitive(self):
        assert find_highlight_ranges("Hello HELLO hello", "hello") == [(0, 5), (6, 11), (12, 17)]

    def test_empty_keyword(self):
        assert find_highlight_ranges("abc", "") == []

    def test_ranges_do_not_overlap_each_other(self):
        assert find_highlight_ranges("aaaa", "aa") == [(0, 2), (2, 4)]

    def test_rejected_match_does_not_hide_next(self):
        text = "**ab**b"
        # um "b" dentro do conteúdo do bold, outro fora de qualquer span
        assert find_highlight_ranges(text, "b", resolve(text)) == [(3, 4), (6, 7)]


class TestSearchDocument:

    def test_hits_per_field(self):
        doc = build("# café\n\nmais **café**\n\n- sem\n- café `x`")
        hits = search_document(doc, "café")
        assert hits == [
            SearchHit(block_index=1, field_name="text", item_index=None, ranges=[(7, 11)]),
            SearchHit(block_index=2, field_name="items", item_index=1, ranges=[(0, 4)]),
        ]

    def test_no_hits(self):
        assert search_document(build("nada aqui"), "café") == []


class TestMessageMatches:

    def test_visible_text_contains_keyword(self):
        assert message_matches(build("Hello **world**"), "hello world")

    def test_fuzzy_match(self):
        assert message_matches(build("hello"), "helo")

    def test_unrelated(self):
        assert not message_matches(build("hello"), "xyz")
