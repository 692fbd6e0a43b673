"""
Highlighter - Ranges de destaque de busca compatíveis com spans inline.

Um range de busca nunca pode "cortar" um span de estilo: ou fica
inteiramente fora de todos os spans, ou inteiramente dentro do conteúdo
visível de um span (nunca tocando delimitadores).

    texto:  "veja **busca** e busca"
    spans:  BOLD [5, 14)  conteúdo [7, 12)
    "busca" → [(7, 12), (17, 22)]

    texto:  "a**b**c"    keyword "a**b"  → []  (cruza o delimitador)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..parsing.document import Document
from ..parsing.inline_models import InlineSpan
from ..utils.delimiters import content_range
from ..utils.fuzzy_matcher import SIMILARITY_THRESHOLD, is_fuzzy_match

logger = logging.getLogger(__name__)


@dataclass
class SearchHit:
    """Ocorrências da busca em um campo de um bloco."""
    block_index: int
    field_name: str
    item_index: Optional[int] = None
    ranges: List[Tuple[int, int]] = field(default_factory=list)


def _fits_spans(start: int, end: int, spans: Sequence[InlineSpan]) -> bool:
    for span in spans:
        if not span.overlaps(start, end):
            continue
        inner_start, inner_end = content_range(span)
        return inner_start <= start and end <= inner_end
    return True


def find_highlight_ranges(text: str, keyword: str, spans: Sequence[InlineSpan] = ()) -> List[Tuple[int, int]]:
    """
    Encontra ocorrências (sem diferenciar caixa) da palavra-chave.

    Args:
        text: Texto original do campo
        keyword: Termo buscado
        spans: Spans já resolvidos para o mesmo texto

    Returns:
        Ranges [start, end) ordenados e disjuntos, compatíveis com os spans
    """
    if not keyword or not text:
        return []

    # lower() pode mudar o comprimento (ex: "İ"); nesse caso busca com caixa exata
    haystack = text.lower()
    needle = keyword.lower()
    if len(haystack) != len(text) or len(needle) != len(keyword):
        haystack, needle = text, keyword

    ranges: List[Tuple[int, int]] = []
    pos = 0
    while True:
        start = haystack.find(needle, pos)
        if start == -1:
            break
        end = start + len(needle)
        if _fits_spans(start, end, spans):
            ranges.append((start, end))
            pos = end
        else:
            pos = start + 1
    return ranges


def search_document(document: Document, keyword: str) -> List[SearchHit]:
    """
    Busca a palavra-chave em todos os campos resolvidos do documento.

    Returns:
        Um SearchHit por campo com pelo menos uma ocorrência
    """
    hits: List[SearchHit] = []
    for block_index, block in enumerate(document.blocks):
        for field_name, item_index, text, spans in block.resolved_fields():
            ranges = find_highlight_ranges(text, keyword, spans)
            if ranges:
                hits.append(SearchHit(
                    block_index=block_index,
                    field_name=field_name,
                    item_index=item_index,
                    ranges=ranges,
                ))

    logger.debug(f"Search '{keyword}': {len(hits)} fields with matches")
    return hits


def message_matches(document: Document, keyword: str, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    """Verifica se o texto visível da mensagem casa (aproximadamente) com a busca."""
    return is_fuzzy_match(document.to_plain_text(), keyword, threshold)
