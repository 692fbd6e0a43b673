"""
InlineSpanResolver - Detecção de Estilos Inline por Offsets.

Recebe o texto de UM bloco (parágrafo, item de lista, citação) e retorna
spans de estilo não sobrepostos, com offsets no texto ORIGINAL. Nunca
reescreve nem retorna texto modificado.

Precedência (ordem fixa):
========================

| Ordem | Tipo          | Pattern                          | Variante |
|-------|---------------|----------------------------------|----------|
| 1     | CODE          | `([^`]+)`                        | ambas    |
| 2     | STRIKETHROUGH | ~~([^~]+)~~                      | ambas    |
| 3     | BOLD          | \\*\\*([^*]+)\\*\\*                  | ambas    |
| 4     | ITALIC        | \\*([^*]+)\\* (fora de runs **)    | rica     |
| 5     | LINK          | \\[([^\\]]+)\\]\\(([^)]+)\\)          | rica     |
| 6     | HIGHLIGHT     | ==([^=]+)==                      | rica     |

Política de Conflito:
====================

    Todos os matchers rodam sobre o texto original. Um candidato que
    intersecta qualquer span já aceito (de precedência maior ou do mesmo
    matcher) é descartado INTEIRO, nunca truncado. A busca do mesmo
    matcher recomeça um caractere após o início do candidato descartado,
    então um candidato inválido não esconde um match válido logo depois:

        "`**x**` e **y**"
         └─CODE─┘   └BOLD┘      ← "**x**" dentro do código é descartado,
                                   "**y**" continua sendo encontrado

    Os spans aceitos ficam ordenados por start (são disjuntos), então o
    teste de conflito é uma busca binária pelo vizinho à esquerda e pelo
    vizinho à direita: O(log k) por candidato.

    Os patterns usam apenas classes negadas ([^`], [^~], [^*]...), então
    não há backtracking catastrófico.

Itálico:
=======

    Um "*" só abre ou fecha itálico se não faz parte de um run "**" ainda
    livre. Asteriscos já consumidos por um span aceito não contam:

        "**a***b*"   → BOLD [0, 5) + ITALIC [5, 8)
        "**a*"       → nada (bold sem fechamento não vira itálico)

Delimitador sem fechamento ("**bold") não gera span: os asteriscos
continuam visíveis no texto.
"""

import re
from bisect import bisect_right
from typing import List, Optional, Tuple

from .inline_models import InlineSpan, SpanKind


class InlineSpanResolver:
    """
    Resolver de spans inline.

    Usage:
        resolver = InlineSpanResolver()
        spans = resolver.resolve("Hello **world**.")
        # [InlineSpan(bold, 6, 15)]

        rich = InlineSpanResolver(rich=True)
        spans = rich.resolve("veja [docs](https://x.y) e ==isto==")
    """

    PATTERN_CODE = re.compile(r'`([^`]+)`')
    PATTERN_STRIKETHROUGH = re.compile(r'~~([^~]+)~~')
    PATTERN_BOLD = re.compile(r'\*\*([^*]+)\*\*')
    PATTERN_ITALIC = re.compile(r'\*([^*]+)\*')
    PATTERN_LINK = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
    PATTERN_HIGHLIGHT = re.compile(r'==([^=]+)==')

    BASIC_MATCHERS: Tuple[Tuple[SpanKind, "re.Pattern[str]"], ...] = (
        (SpanKind.CODE, PATTERN_CODE),
        (SpanKind.STRIKETHROUGH, PATTERN_STRIKETHROUGH),
        (SpanKind.BOLD, PATTERN_BOLD),
    )

    RICH_MATCHERS: Tuple[Tuple[SpanKind, "re.Pattern[str]"], ...] = BASIC_MATCHERS + (
        (SpanKind.ITALIC, PATTERN_ITALIC),
        (SpanKind.LINK, PATTERN_LINK),
        (SpanKind.HIGHLIGHT, PATTERN_HIGHLIGHT),
    )

    def __init__(self, rich: bool = False):
        self.rich = rich
        self.matchers = self.RICH_MATCHERS if rich else self.BASIC_MATCHERS

    def resolve(self, text: str) -> List[InlineSpan]:
        """
        Resolve os spans inline de um texto.

        Args:
            text: Texto de um bloco ou item de lista

        Returns:
            Spans disjuntos, ordenados por start
        """
        if not text:
            return []

        accepted = _AcceptedSpans()
        for kind, pattern in self.matchers:
            self._collect(text, kind, pattern, accepted)
            accepted.commit()

        return accepted.spans

    @staticmethod
    def _collect(text: str, kind: SpanKind, pattern: "re.Pattern[str]", accepted: "_AcceptedSpans"):
        """Aplica um matcher, aceitando apenas candidatos que não intersectam spans aceitos."""
        pos = 0
        while pos < len(text):
            match = pattern.search(text, pos)
            if match is None:
                break

            start, end = match.span()
            if accepted.overlaps(start, end):
                pos = start + 1
                continue

            if kind == SpanKind.ITALIC and _touches_free_star(text, start, end, accepted):
                pos = start + 1
                continue

            url: Optional[str] = match.group(2) if kind == SpanKind.LINK else None
            accepted.add(InlineSpan(kind=kind, start=start, end=end, url=url))
            pos = end


class _AcceptedSpans:
    """
    Spans aceitos, disjuntos e ordenados por start.

    Um matcher varre o texto da esquerda para a direita, então os spans
    de uma passada chegam em ordem e ficam em `pending` até `commit()`,
    que funde as duas sequências ordenadas de uma vez.
    """

    def __init__(self):
        self.starts: List[int] = []
        self.spans: List[InlineSpan] = []
        self.pending: List[InlineSpan] = []

    def add(self, span: InlineSpan):
        self.pending.append(span)

    def commit(self):
        if not self.pending:
            return
        self.spans = sorted(self.spans + self.pending, key=lambda s: s.start)
        self.starts = [span.start for span in self.spans]
        self.pending = []

    def overlaps(self, start: int, end: int) -> bool:
        # Candidatos começam depois do último pendente: só ele pode tocar [start, end)
        if self.pending and self.pending[-1].overlaps(start, end):
            return True

        # Só o último span com start <= start e o seguinte podem intersectar
        index = bisect_right(self.starts, start)
        if index > 0 and self.spans[index - 1].end > start:
            return True
        return index < len(self.spans) and self.spans[index].start < end

    def covers(self, pos: int) -> bool:
        return self.overlaps(pos, pos + 1)


def _touches_free_star(text: str, start: int, end: int, accepted: _AcceptedSpans) -> bool:
    """True se o itálico encosta num "*" que não pertence a nenhum span aceito."""
    before = start - 1
    if before >= 0 and text[before] == "*" and not accepted.covers(before):
        return True
    return end < len(text) and text[end] == "*" and not accepted.covers(end)


_basic_resolver = InlineSpanResolver(rich=False)
_rich_resolver = InlineSpanResolver(rich=True)


def resolve(text: str) -> List[InlineSpan]:
    """Resolver por nós: BOLD, CODE, STRIKETHROUGH."""
    return _basic_resolver.resolve(text)


def resolve_rich(text: str) -> List[InlineSpan]:
    """Resolver rico: adiciona ITALIC, LINK e HIGHLIGHT."""
    return _rich_resolver.resolve(text)
