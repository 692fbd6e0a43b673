"""
Módulo de Parsing para Mensagens de Chat em Markdown.

Este módulo transforma o texto cru de uma mensagem em uma estrutura
estilizável, sem reescrever o texto: os estilos inline são reportados como
offsets no texto original, para que seleção, cópia e destaque de busca
continuem corretos depois que o renderer esconde os delimitadores.

Arquitetura do Parsing:
======================

    Texto da mensagem
         │
         ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                         BlockSegmenter                              │
    │                 (varredura única por linhas)                        │
    │                                                                     │
    │  Texto ──► [Regex por linha] ──► Blocos tipados e ordenados         │
    │                                                                     │
    │  - ``` lang ... ```       → CodeBlock                               │
    │  - # Título               → Heading                                 │
    │  - | a | b |              → Table                                   │
    │  - --- / *** / ___        → HorizontalRule                          │
    │  - - item / 1. item       → UnorderedList / OrderedList             │
    │  - > citação              → BlockQuote                              │
    │  - resto                  → Paragraph                               │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                       InlineSpanResolver                            │
    │                (por bloco, no texto ORIGINAL)                       │
    │                                                                     │
    │  `code`  >  ~~strike~~  >  **bold**  [> *italic* > [a](u) > ==h==]  │
    │                                                                     │
    │  Spans (kind, start, end) disjuntos, incluindo delimitadores        │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                        DocumentBuilder                              │
    │                                                                     │
    │  Document(blocks=[ResolvedBlock(node, inline=((campo, spans),))])   │
    └─────────────────────────────────────────────────────────────────────┘

Exemplo de Uso:
==============

    ```python
    from chatmark.parsing import build, BlockType

    doc = build("# Title\\n\\nHello **world**.")

    for block in doc:
        print(block.block_type, block.inline)

    paragraph = doc.blocks_of_type(BlockType.PARAGRAPH)[0]
    span = paragraph.spans_for("text")[0]
    # InlineSpan(bold, 6, 15) → "**world**"
    ```

Garantias:
=========

| Propriedade     | Garantia                                            |
|-----------------|-----------------------------------------------------|
| Determinismo    | build(T) == build(T)                                |
| Totalidade      | nenhuma entrada str levanta exceção                 |
| Disjunção       | spans de um campo nunca se intersectam              |
| Ordem           | blocos na ordem das linhas do texto fonte           |
| Forma da tabela | toda linha tem len(headers) células                 |
"""

from .block_models import (
    BlockType,
    BlockNode,
    Heading,
    Paragraph,
    CodeBlock,
    Table,
    UnorderedList,
    OrderedList,
    BlockQuote,
    HorizontalRule,
    dispatch_block,
    block_to_dict,
)
from .block_segmenter import BlockSegmenter, segment
from .inline_models import SpanKind, InlineSpan, DELIMITER_WIDTHS
from .inline_resolver import InlineSpanResolver, resolve, resolve_rich
from .document import Document, ResolvedBlock
from .schemas import DocumentSchema, BlockSchema, InlineSpanSchema
from .invariant_validator import (
    DocumentValidator,
    DocumentInvariantError,
    ValidationResult,
    check_spans,
    check_line_coverage,
    check_table_shape,
)
from .document_builder import DocumentBuilder, build

__all__ = [
    # Blocos
    "BlockType",
    "BlockNode",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "Table",
    "UnorderedList",
    "OrderedList",
    "BlockQuote",
    "HorizontalRule",
    "dispatch_block",
    "block_to_dict",
    # Segmentador
    "BlockSegmenter",
    "segment",
    # Inline
    "SpanKind",
    "InlineSpan",
    "DELIMITER_WIDTHS",
    "InlineSpanResolver",
    "resolve",
    "resolve_rich",
    # Document
    "Document",
    "ResolvedBlock",
    "DocumentBuilder",
    "build",
    # Schemas
    "DocumentSchema",
    "BlockSchema",
    "InlineSpanSchema",
    # Validação
    "DocumentValidator",
    "DocumentInvariantError",
    "ValidationResult",
    "check_spans",
    "check_line_coverage",
    "check_table_shape",
]
