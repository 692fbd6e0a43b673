"""
Busca em mensagens parseadas.
"""

from .highlighter import (
    SearchHit,
    find_highlight_ranges,
    search_document,
    message_matches,
)

__all__ = [
    "SearchHit",
    "find_highlight_ranges",
    "search_document",
    "message_matches",
]
