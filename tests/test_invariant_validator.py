# -*- coding: utf-8 -*-
"""
Testes do DocumentValidator.

Checks testados:
1. span_bounds / span_disjointness / span_order
2. table_shape
3. line_order / line_coverage
4. Documents gerados pelo builder nunca violam invariantes
"""

import pytest

from chatmark.config import ParserConfig
from chatmark.parsing.block_models import Paragraph, Table
from chatmark.parsing.document import Document, ResolvedBlock
from chatmark.parsing.document_builder import build
from chatmark.parsing.inline_models import InlineSpan, SpanKind
from chatmark.parsing.invariant_validator import (
    DocumentInvariantError,
    DocumentValidator,
    check_line_coverage,
    check_spans,
    check_table_shape,
)


CORPUS = [
    "",
    "# Title\n\nHello **world**.",
    "```kotlin\nval x = 1\n```",
    "- a\n- b\n- c",
    "|H1|H2|\n|---|---|\n|a|b|\n|c|",
    "~~gone~~ and `code`",
    "**unterminated",
    "intro\n```\nopen fence\n\n# inside",
    "> q1\n> **q2**\n\n1. *x*\n2) [l](u)\n\n---\n\n==h==",
    "|a|b|\n|1|2|3|4|\n|x|\ntail\n\n\n   \n# end",
    "line\r\nother\rthird\n\n- `a**b`**c**",
]


# =============================================================================
# Helpers
# =============================================================================

def _bold(start: int, end: int) -> InlineSpan:
    return InlineSpan(SpanKind.BOLD, start, end)


class TestCheckSpans:

    def test_valid_spans(self):
        assert check_spans("**a** **b**", [_bold(0, 5), _bold(6, 11)]) == []

    def test_out_of_bounds(self):
        violations = check_spans("ab", [_bold(0, 5)])
        assert [v.check for v in violations] == ["span_bounds"]

    def test_empty_span(self):
        violations = check_spans("abc", [_bold(1, 1)])
        assert [v.check for v in violations] == ["span_bounds"]

    def test_overlap(self):
        violations = check_spans("**a**b**", [_bold(0, 5), _bold(3, 8)])
        assert [v.check for v in violations] == ["span_disjointness"]

    def test_unsorted(self):
        violations = check_spans("**a** **b**", [_bold(6, 11), _bold(0, 5)])
        assert [v.check for v in violations] == ["span_order"]


class TestCheckTableShape:

    def test_ragged_table(self):
        table = Table(headers=("a", "b"), rows=(("1",), ("1", "2")))
        violations = check_table_shape(table)
        assert len(violations) == 1
        assert "linha 0" in violations[0].message


class TestCheckLineCoverage:

    def test_uncovered_line(self):
        violations = check_line_coverage("a\nb", [Paragraph("a", line_start=0, line_end=1)])
        assert [v.check for v in violations] == ["line_coverage"]

    def test_uncovered_blank_line_is_fine(self):
        nodes = [Paragraph("a", line_start=0, line_end=1), Paragraph("b", line_start=2, line_end=3)]
        assert check_line_coverage("a\n\nb", nodes) == []

    def test_out_of_order(self):
        nodes = [Paragraph("b", line_start=1, line_end=2), Paragraph("a", line_start=0, line_end=1)]
        violations = check_line_coverage("a\nb", nodes)
        assert "line_order" in [v.check for v in violations]


class TestDocumentValidator:

    def test_assert_valid_raises_on_bad_document(self):
        doc = Document(
            blocks=(ResolvedBlock(
                node=Paragraph("ab", line_start=0, line_end=1),
                inline={"text": [_bold(0, 5)]},
            ),),
            source_text="ab",
        )
        with pytest.raises(DocumentInvariantError) as exc_info:
            DocumentValidator().assert_valid(doc)

        violation = exc_info.value.violations[0]
        assert violation.check == "span_bounds"
        assert violation.block_index == 0
        assert violation.field_name == "text"

    def test_item_index_is_reported(self):
        from chatmark.parsing.block_models import UnorderedList

        doc = Document(
            blocks=(ResolvedBlock(
                node=UnorderedList(("a", "**b**"), line_start=0, line_end=2),
                inline={"items": [[], [_bold(0, 5), _bold(2, 4)]]},
            ),),
            source_text="- a\n- **b**",
        )
        violations = DocumentValidator().validate(doc)
        assert [(v.check, v.item_index) for v in violations] == [("span_disjointness", 1)]

    def test_violations_are_logged(self, caplog):
        doc = Document(
            blocks=(ResolvedBlock(node=Paragraph("a", line_start=0, line_end=1)),),
            source_text="a\nb",
        )
        DocumentValidator().validate(doc)
        assert "Invariant violation [line_coverage]" in caplog.text


class TestBuiltDocumentsAreValid:
    """Propriedades: documentos do builder nunca violam invariantes."""

    @pytest.mark.parametrize("text", CORPUS)
    @pytest.mark.parametrize("rich", [False, True])
    def test_no_violations(self, text, rich):
        doc = build(text, ParserConfig(rich_inline=rich, resolve_headings=True))
        assert DocumentValidator().validate(doc) == []

    @pytest.mark.parametrize("text", CORPUS)
    def test_every_table_has_header_width(self, text):
        for block in build(text):
            if isinstance(block.node, Table):
                assert all(len(row) == len(block.node.headers) for row in block.node.rows)
