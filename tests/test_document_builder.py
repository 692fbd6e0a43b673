# -*- coding: utf-8 -*-
"""
Testes do DocumentBuilder.

Valida a montagem do Document: quais campos recebem spans inline, a
seleção do resolver pela configuração, determinismo e exportação.
"""

import logging

import pytest

from chatmark.config import ParserConfig
from chatmark.parsing.block_models import (
    BlockType,
    Heading,
    Paragraph,
)
from chatmark.parsing.document import ResolvedBlock
from chatmark.parsing.document_builder import DocumentBuilder, build
from chatmark.parsing.inline_models import InlineSpan, SpanKind
from chatmark.parsing.schemas import DocumentSchema
from chatmark.utils.text_normalization import compute_source_hash


FULL_MESSAGE = """# Resumo

Olá **mundo**, veja `x`.

- item **um**
- item dois

1. primeiro
2. ~~segundo~~

> citação **forte**

---

| a | b |
|---|---|
| 1 | 2 |

```python
print("**não**")
```
"""


class TestReferenceScenario:

    def test_heading_and_paragraph_with_bold(self):
        doc = build("# Title\n\nHello **world**.")

        assert doc.nodes == [Heading(level=1, text="Title"), Paragraph(text="Hello **world**.")]
        assert doc[0].inline == ()
        assert dict(doc[1].inline) == {"text": (InlineSpan(SpanKind.BOLD, 6, 15),)}

    def test_empty_input(self):
        doc = build("")
        assert len(doc) == 0
        assert doc.source_hash == compute_source_hash("")


class TestInlineResolutionPolicy:

    def test_list_items_are_resolved_individually(self):
        doc = build("- **a**\n- b")
        assert dict(doc[0].inline) == {"items": ((InlineSpan(SpanKind.BOLD, 0, 5),), ())}
        assert doc[0].spans_for("items", 0) == (InlineSpan(SpanKind.BOLD, 0, 5),)
        assert doc[0].spans_for("items", 5) == ()

    def test_quote_content_is_resolved(self):
        doc = build("> ~~x~~")
        assert dict(doc[0].inline) == {"content": (InlineSpan(SpanKind.STRIKETHROUGH, 0, 5),)}

    def test_headings_not_resolved_by_default(self):
        doc = build("# **T**", ParserConfig())
        assert doc[0].inline == ()

    def test_headings_resolved_when_enabled(self):
        doc = build("# **T**", ParserConfig(resolve_headings=True))
        assert doc[0].spans_for("text") == (InlineSpan(SpanKind.BOLD, 0, 5),)

    def test_table_and_code_never_resolved(self):
        doc = build("|**a**|\n\n```\n**b**\n```\n\n---")
        assert [block.inline for block in doc] == [(), (), ()]

    def test_rich_config_selects_rich_resolver(self):
        basic = build("*a*", ParserConfig(rich_inline=False))
        rich = build("*a*", ParserConfig(rich_inline=True))
        assert basic[0].spans_for("text") == ()
        assert rich[0].spans_for("text") == (InlineSpan(SpanKind.ITALIC, 0, 3),)


class TestDocument:

    def test_block_order_and_types(self):
        doc = build(FULL_MESSAGE)
        assert [block.block_type for block in doc] == [
            BlockType.HEADING,
            BlockType.PARAGRAPH,
            BlockType.UNORDERED_LIST,
            BlockType.ORDERED_LIST,
            BlockType.BLOCK_QUOTE,
            BlockType.HORIZONTAL_RULE,
            BlockType.TABLE,
            BlockType.CODE_BLOCK,
        ]

    def test_span_count(self):
        doc = build(FULL_MESSAGE, ParserConfig())
        # bold + code no parágrafo, bold no item, strike no item, bold na citação
        assert doc.span_count == 5

    def test_blocks_of_type(self):
        doc = build(FULL_MESSAGE)
        lists = doc.blocks_of_type(BlockType.ORDERED_LIST)
        assert len(lists) == 1
        assert lists[0].node.items == ("primeiro", "~~segundo~~")

    def test_deterministic(self):
        assert build(FULL_MESSAGE) == build(FULL_MESSAGE)

    def test_document_is_hashable_snapshot(self):
        """Spans são guardados em tuplas: o Document é imutável e hashable."""
        doc = build(FULL_MESSAGE, ParserConfig(rich_inline=True))
        assert hash(doc) == hash(build(FULL_MESSAGE, ParserConfig(rich_inline=True)))

        items = doc.blocks_of_type(BlockType.UNORDERED_LIST)[0]
        assert isinstance(items.inline, tuple)
        assert isinstance(items.spans_for("items", 0), tuple)

    def test_resolved_block_freezes_dict_input(self):
        block = ResolvedBlock(
            node=Paragraph("**a**"),
            inline={"text": [InlineSpan(SpanKind.BOLD, 0, 5)]},
        )
        assert block.inline == (("text", (InlineSpan(SpanKind.BOLD, 0, 5),)),)
        assert block == ResolvedBlock(node=Paragraph("**a**"), inline=block.inline)

    def test_builder_instance_is_reusable(self):
        builder = DocumentBuilder(ParserConfig(rich_inline=True))
        first = builder.build("==a==")
        second = builder.build("==a==")
        assert first == second
        assert first.source_hash == second.source_hash

    def test_crlf_and_lf_share_hash(self):
        assert build("a\r\nb").source_hash == build("a\nb").source_hash

    def test_to_dict(self):
        data = build("Hello **world**.").to_dict()
        assert data["block_count"] == 1
        assert data["span_count"] == 1
        assert data["blocks"][0] == {
            "block_type": "paragraph",
            "line_start": 0,
            "line_end": 1,
            "text": "Hello **world**.",
            "inline": {"text": [{"kind": "bold", "start": 6, "end": 15}]},
        }

    def test_to_schema(self):
        schema = build(FULL_MESSAGE, ParserConfig(rich_inline=True)).to_schema()
        assert isinstance(schema, DocumentSchema)
        assert schema.block_count == 8
        assert schema.blocks[6].headers == ["a", "b"]

    def test_to_plain_text(self):
        doc = build("# Title\n\nHello **world**.")
        assert doc.to_plain_text() == "Title\n\nHello world."


class TestLoggingAndValidation:

    def test_build_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="chatmark.parsing.document_builder"):
            build("Hello **world**.")
        assert "Built document: 1 blocks, 1 inline spans" in caplog.text

    def test_validation_enabled_logs_no_warning_for_valid_document(self, caplog):
        with caplog.at_level(logging.WARNING):
            build(FULL_MESSAGE, ParserConfig(validate_invariants=True))
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.parametrize("text", ["", "   ", "\ud800", "```", "|", "> ", "#", "1.", "- "])
    def test_never_raises(self, text):
        build(text, ParserConfig(rich_inline=True, resolve_headings=True, validate_invariants=True))
