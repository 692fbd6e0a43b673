# -*- coding: utf-8 -*-
"""
Delimiters - Derivações de renderização a partir de spans inline.

Tudo aqui é derivado apenas de (kind, start, end, url): o renderer nunca
precisa de uma segunda passada pelo texto para saber onde estão os
delimitadores.

    "Hello **world**."
           [6 ,15)  BOLD
    hidden_ranges   → [(6, 8), (13, 15)]
    content_range   → (8, 13)  = "world"
    strip_delimiters→ "Hello world."
"""

from typing import List, Sequence, Tuple

from ..parsing.block_models import (
    BlockQuote,
    CodeBlock,
    Heading,
    HorizontalRule,
    OrderedList,
    Paragraph,
    Table,
    UnorderedList,
)
from ..parsing.inline_models import DELIMITER_WIDTHS, InlineSpan, SpanKind


def delimiter_widths(span: InlineSpan) -> Tuple[int, int]:
    """
    Retorna (largura inicial, largura final) dos delimitadores do span.

    Links: "[" no início e "](url)" no fim.
    """
    if span.kind == SpanKind.LINK:
        return 1, len(span.url or "") + 3
    return DELIMITER_WIDTHS[span.kind]


def content_range(span: InlineSpan) -> Tuple[int, int]:
    """Range [start, end) do conteúdo visível, sem delimitadores."""
    leading, trailing = delimiter_widths(span)
    return span.start + leading, span.end - trailing


def hidden_ranges(spans: Sequence[InlineSpan]) -> List[Tuple[int, int]]:
    """Ranges dos caracteres de delimitador, ordenados por posição."""
    ranges: List[Tuple[int, int]] = []
    for span in spans:
        inner_start, inner_end = content_range(span)
        if span.start < inner_start:
            ranges.append((span.start, inner_start))
        if inner_end < span.end:
            ranges.append((inner_end, span.end))
    ranges.sort()
    return ranges


def strip_delimiters(text: str, spans: Sequence[InlineSpan]) -> str:
    """
    Remove os delimitadores do texto, mantendo todo o resto.

    Args:
        text: Texto original do campo
        spans: Spans resolvidos para esse mesmo texto

    Returns:
        Texto visível (o que o usuário lê após o render)
    """
    parts: List[str] = []
    pos = 0
    for start, end in hidden_ranges(spans):
        parts.append(text[pos:start])
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


def to_plain_text(document) -> str:
    """
    Gera texto puro de um Document inteiro (para copiar a mensagem).

    - Delimitadores inline são removidos
    - Listas ordenadas são numeradas 1..N, não ordenadas usam "•"
    - Células de tabela são separadas por tab
    - Separadores viram "---"
    """
    chunks: List[str] = []

    for block in document.blocks:
        node = block.node

        if isinstance(node, Heading):
            chunks.append(strip_delimiters(node.text, block.spans_for("text")))
        elif isinstance(node, Paragraph):
            chunks.append(strip_delimiters(node.text, block.spans_for("text")))
        elif isinstance(node, CodeBlock):
            chunks.append(node.code)
        elif isinstance(node, Table):
            lines = ["\t".join(node.headers)]
            lines.extend("\t".join(row) for row in node.rows)
            chunks.append("\n".join(lines))
        elif isinstance(node, UnorderedList):
            chunks.append("\n".join(
                f"• {strip_delimiters(item, block.spans_for('items', i))}"
                for i, item in enumerate(node.items)
            ))
        elif isinstance(node, OrderedList):
            chunks.append("\n".join(
                f"{i + 1}. {strip_delimiters(item, block.spans_for('items', i))}"
                for i, item in enumerate(node.items)
            ))
        elif isinstance(node, BlockQuote):
            chunks.append(strip_delimiters(node.content, block.spans_for("content")))
        elif isinstance(node, HorizontalRule):
            chunks.append("---")

    return "\n\n".join(chunks)
