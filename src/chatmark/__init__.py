"""
chatmark - Parser de Markdown restrito para mensagens de chat.

    from chatmark import build

    doc = build("Hello **world**.")
"""

from .config import ParserConfig
from .parsing import (
    BlockType,
    SpanKind,
    InlineSpan,
    Document,
    DocumentBuilder,
    build,
    segment,
    resolve,
    resolve_rich,
)
from .utils.delimiters import strip_delimiters, to_plain_text
from .search import find_highlight_ranges, search_document

__version__ = "1.0.0"

__all__ = [
    "ParserConfig",
    "BlockType",
    "SpanKind",
    "InlineSpan",
    "Document",
    "DocumentBuilder",
    "build",
    "segment",
    "resolve",
    "resolve_rich",
    "strip_delimiters",
    "to_plain_text",
    "find_highlight_ranges",
    "search_document",
]
