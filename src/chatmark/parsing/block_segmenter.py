"""
BlockSegmenter - Segmentador Determinístico de Blocos Markdown.

Este módulo divide o texto de uma mensagem de chat em uma sequência ordenada
de blocos tipados (título, parágrafo, bloco de código, tabela, listas,
citação, separador). É uma função pura: mesma entrada, mesma saída, sem
estado global mutável.

Fluxo de Segmentação:
====================

    segment(text)
        │
        ├── split_lines()              # Normaliza CRLF/CR e divide em linhas
        │
        └── Para cada linha (varredura única com lookahead):
                │
                ├── _consume_code_block()   # ``` lang ... ```
                ├── _consume_heading()      # # Título
                ├── _consume_table()        # | a | b |
                ├── _consume_rule()         # --- *** ___
                ├── _consume_list()         # - item / 1. item
                ├── _consume_quote()        # > citação
                ├── (linha em branco)       # separador, nunca emitido
                └── _consume_paragraph()    # fallback

Precedência:
===========

| Ordem | Bloco             | Pattern (linha sem espaços nas pontas)   |
|-------|-------------------|------------------------------------------|
| 1     | Código cercado    | ^`{3,}\\s*([^`]*)$                        |
| 2     | Título            | ^(#{1,6})\\s+(.+)$                        |
| 3     | Tabela            | ^\\|(.+)\\|$                                |
| 4     | Separador         | ^([-*_])(\\s*\\1){2,}$                      |
| 5     | Lista não ordenada| ^[-*+]\\s+(.+)$                           |
| 6     | Lista ordenada    | ^\\d+[.)]\\s+(.+)$                         |
| 7     | Citação           | ^>\\s?(.+)$                               |
| 8     | Parágrafo         | (qualquer outra linha não vazia)         |

O separador é testado antes das listas: "- - -" e "* * *" são separadores,
não listas com um item "- -".

Degradação (nunca levanta exceção):
==================================

- Sintaxe malformada ou ambígua → Paragraph
- Cerca de código sem fechamento → consome até o fim como código
- Linhas de tabela com menos células → completadas com ""
- Linhas de tabela com mais células → truncadas para len(headers)
"""

import re
import logging
from typing import List, Tuple

from ..utils.text_normalization import split_lines, is_blank
from .block_models import (
    BlockNode,
    BlockQuote,
    CodeBlock,
    Heading,
    HorizontalRule,
    OrderedList,
    Paragraph,
    Table,
    UnorderedList,
)

logger = logging.getLogger(__name__)


class BlockSegmenter:
    """
    Segmentador de blocos para mensagens de chat.

    Usage:
        segmenter = BlockSegmenter()
        nodes = segmenter.segment(message_text)

        for node in nodes:
            print(node.block_type, node.line_start, node.line_end)
    """

    # =========================================================================
    # REGEX PATTERNS - aplicados à linha sem whitespace nas pontas
    # =========================================================================

    # Abertura de código: "```", "```kotlin", "````python"
    PATTERN_FENCE_OPEN = re.compile(r'^`{3,}\s*([^`]*)$')

    # Fechamento de código: somente crases (3 ou mais)
    PATTERN_FENCE_CLOSE = re.compile(r'^`{3,}$')

    # Título: "# Título" ... "###### Título"
    PATTERN_HEADING = re.compile(r'^(#{1,6})\s+(.+)$')

    # Linha de tabela: "| a | b |"
    PATTERN_TABLE_ROW = re.compile(r'^\|(.+)\|$')

    # Separador de cabeçalho de tabela: "|---|:---:|", "--- | ---"
    PATTERN_TABLE_SEPARATOR = re.compile(r'^\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?$')

    # Separador horizontal: "---", "***", "___", "- - -"
    PATTERN_RULE = re.compile(r'^([-*_])(?:[ \t]*\1){2,}$')

    # Item de lista não ordenada: "- a", "* b", "+ c"
    PATTERN_UNORDERED_ITEM = re.compile(r'^[-*+]\s+(.+)$')

    # Item de lista ordenada: "1. a", "2) b"
    PATTERN_ORDERED_ITEM = re.compile(r'^\d+[.)]\s+(.+)$')

    # Citação: "> texto", ">texto"
    PATTERN_QUOTE = re.compile(r'^>\s?(.+)$')

    def segment(self, text: str) -> List[BlockNode]:
        """
        Segmenta o texto em blocos ordenados.

        Args:
            text: Texto completo da mensagem

        Returns:
            Lista de BlockNode na ordem do texto fonte (vazia para texto vazio)
        """
        lines = split_lines(text)
        nodes: List[BlockNode] = []
        i = 0

        while i < len(lines):
            if is_blank(lines[i]):
                i += 1
                continue

            node, i = self._consume_block(lines, i)
            nodes.append(node)

        logger.debug(f"Segmented message: {len(lines)} lines, {len(nodes)} blocks")
        return nodes

    def _consume_block(self, lines: List[str], i: int) -> Tuple[BlockNode, int]:
        """Classifica a linha i e consome o bloco que começa nela."""
        stripped = lines[i].strip()

        fence = self.PATTERN_FENCE_OPEN.match(stripped)
        if fence:
            return self._consume_code_block(lines, i, fence.group(1).strip())

        heading = self.PATTERN_HEADING.match(stripped)
        if heading:
            node = Heading(
                level=len(heading.group(1)),
                text=heading.group(2).strip(),
                line_start=i,
                line_end=i + 1,
            )
            return node, i + 1

        if self.PATTERN_TABLE_ROW.match(stripped):
            return self._consume_table(lines, i)

        if self.PATTERN_RULE.match(stripped):
            return HorizontalRule(line_start=i, line_end=i + 1), i + 1

        if self.PATTERN_UNORDERED_ITEM.match(stripped):
            items, end = self._consume_run(lines, i, self.PATTERN_UNORDERED_ITEM)
            return UnorderedList(items=items, line_start=i, line_end=end), end

        if self.PATTERN_ORDERED_ITEM.match(stripped):
            items, end = self._consume_run(lines, i, self.PATTERN_ORDERED_ITEM)
            return OrderedList(items=items, line_start=i, line_end=end), end

        if self.PATTERN_QUOTE.match(stripped):
            parts, end = self._consume_run(lines, i, self.PATTERN_QUOTE)
            return BlockQuote(content="\n".join(parts), line_start=i, line_end=end), end

        return self._consume_paragraph(lines, i)

    def _is_block_start(self, stripped: str) -> bool:
        """Retorna True se a linha abre um bloco que não é parágrafo."""
        return bool(
            self.PATTERN_FENCE_OPEN.match(stripped)
            or self.PATTERN_HEADING.match(stripped)
            or self.PATTERN_TABLE_ROW.match(stripped)
            or self.PATTERN_RULE.match(stripped)
            or self.PATTERN_UNORDERED_ITEM.match(stripped)
            or self.PATTERN_ORDERED_ITEM.match(stripped)
            or self.PATTERN_QUOTE.match(stripped)
        )

    def _consume_code_block(self, lines: List[str], start: int, language: str) -> Tuple[CodeBlock, int]:
        """
        Consome um bloco de código cercado.

        As linhas do corpo são copiadas sem alteração (indentação preservada).
        Sem cerca de fechamento, o bloco vai até o fim do texto.
        """
        i = start + 1
        body: List[str] = []
        closed = False

        while i < len(lines):
            if self.PATTERN_FENCE_CLOSE.match(lines[i].strip()):
                closed = True
                i += 1
                break
            body.append(lines[i])
            i += 1

        if not closed:
            logger.debug(f"Unterminated code fence at line {start}, consuming to end of input")

        return CodeBlock(language=language, code="\n".join(body), line_start=start, line_end=i), i

    def _consume_table(self, lines: List[str], start: int) -> Tuple[Table, int]:
        """
        Consome uma tabela: cabeçalho, separador opcional e linhas de dados.

        Linhas de dados são ajustadas para len(headers) células.
        """
        headers = self._split_table_row(lines[start].strip())
        width = len(headers)
        i = start + 1

        if i < len(lines) and self.PATTERN_TABLE_SEPARATOR.match(lines[i].strip()):
            i += 1

        rows: List[Tuple[str, ...]] = []
        while i < len(lines) and self.PATTERN_TABLE_ROW.match(lines[i].strip()):
            cells = self._split_table_row(lines[i].strip())
            if len(cells) != width:
                logger.debug(f"Ragged table row at line {i}: {len(cells)} cells, header has {width}")
                cells = (cells + [""] * width)[:width]
            rows.append(tuple(cells))
            i += 1

        return Table(headers=tuple(headers), rows=tuple(rows), line_start=start, line_end=i), i

    @staticmethod
    def _split_table_row(row: str) -> List[str]:
        """Divide "| a | b |" em ["a", "b"] (remove só as células das pontas)."""
        cells = [cell.strip() for cell in row.split("|")]
        if cells and cells[0] == "":
            cells = cells[1:]
        if cells and cells[-1] == "":
            cells = cells[:-1]
        return cells

    @staticmethod
    def _consume_run(lines: List[str], start: int, pattern: "re.Pattern[str]") -> Tuple[Tuple[str, ...], int]:
        """Consome linhas contíguas que casam com `pattern`, retornando o grupo 1 de cada."""
        items: List[str] = []
        i = start
        while i < len(lines):
            match = pattern.match(lines[i].strip())
            if not match:
                break
            items.append(match.group(1).strip())
            i += 1
        return tuple(items), i

    def _consume_paragraph(self, lines: List[str], start: int) -> Tuple[Paragraph, int]:
        """Junta linhas não classificadas e não vazias em um parágrafo."""
        parts = [lines[start].strip()]
        i = start + 1
        while i < len(lines):
            stripped = lines[i].strip()
            if not stripped or self._is_block_start(stripped):
                break
            parts.append(stripped)
            i += 1
        return Paragraph(text="\n".join(parts), line_start=start, line_end=i), i


_default_segmenter = BlockSegmenter()


def segment(text: str) -> List[BlockNode]:
    """Atalho funcional para BlockSegmenter().segment(text)."""
    return _default_segmenter.segment(text)
