"""
DocumentBuilder - Monta o Document de uma mensagem.

    build(text)
        │
        ├── BlockSegmenter.segment(text)     # blocos ordenados
        │
        ├── Para cada bloco com texto livre:
        │       │
        │       └── InlineSpanResolver.resolve(campo)
        │
        │       | Bloco          | Campo resolvido            |
        │       |----------------|----------------------------|
        │       | Paragraph      | text                       |
        │       | BlockQuote     | content                    |
        │       | Listas         | cada item                  |
        │       | Heading        | text (se resolve_headings) |
        │       | Table/Code/HR  | (nunca)                    |
        │
        └── DocumentValidator (se validate_invariants)

Função pura e sem estado: pode ser chamada em qualquer thread, uma
mensagem não depende de nenhuma outra.
"""

import logging
from typing import Dict, Optional

from ..config import ParserConfig, config as default_config
from ..utils.text_normalization import compute_source_hash
from .block_models import BlockNode, BlockQuote, Heading, OrderedList, Paragraph, UnorderedList
from .block_segmenter import BlockSegmenter
from .document import Document, ResolvedBlock
from .inline_resolver import InlineSpanResolver
from .invariant_validator import DocumentValidator

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    Monta Documents a partir do texto de mensagens.

    Usage:
        builder = DocumentBuilder()
        doc = builder.build("# Título\\n\\nOlá **mundo**.")

        for block in doc:
            print(block.block_type, block.inline)
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """Inicializa o builder."""
        self.config = config or default_config
        self.segmenter = BlockSegmenter()
        self.resolver = InlineSpanResolver(rich=self.config.rich_inline)
        self.validator = DocumentValidator()

    def build(self, text: str) -> Document:
        """
        Parseia a mensagem completa.

        Args:
            text: Texto da mensagem (já completo, sem streaming)

        Returns:
            Document com blocos e spans inline
        """
        text = text or ""
        nodes = self.segmenter.segment(text)
        blocks = tuple(ResolvedBlock(node=node, inline=self._resolve_inline(node)) for node in nodes)

        doc = Document(
            blocks=blocks,
            source_text=text,
            source_hash=compute_source_hash(text),
        )

        logger.info(f"Built document: {len(doc.blocks)} blocks, {doc.span_count} inline spans")

        if self.config.validate_invariants:
            self.validator.validate(doc)

        return doc

    def _resolve_inline(self, node: BlockNode) -> Dict[str, list]:
        """Resolve os campos de texto livre de um bloco."""
        if isinstance(node, Paragraph):
            return {"text": self.resolver.resolve(node.text)}
        if isinstance(node, BlockQuote):
            return {"content": self.resolver.resolve(node.content)}
        if isinstance(node, (UnorderedList, OrderedList)):
            return {"items": [self.resolver.resolve(item) for item in node.items]}
        if isinstance(node, Heading) and self.config.resolve_headings:
            return {"text": self.resolver.resolve(node.text)}
        return {}


def build(text: str, config: Optional[ParserConfig] = None) -> Document:
    """Atalho funcional para DocumentBuilder(config).build(text)."""
    return DocumentBuilder(config).build(text)
