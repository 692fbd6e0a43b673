"""
Inline Models - Spans de estilo inline em coordenadas do texto original.

Um InlineSpan marca um trecho estilizado do texto de UM bloco (ou item de
lista). Os offsets incluem os delimitadores: para "**world**" o span cobre
os dois asteriscos de cada lado. O renderer subtrai as larguras conhecidas
(ver DELIMITER_WIDTHS) para obter o conteúdo visível, sem segunda passada.

    texto:  H e l l o   * * w o r l d * * .
    índice: 0 1 2 3 4 5 6 7 8 9 ...      15 16
                        └─── BOLD [6, 15) ───┘
                        └┬┘             └┬┘
                   delimitador     delimitador
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SpanKind(str, Enum):
    """Tipos de estilo inline."""

    # Resolver por nós (usado pelo view binder)
    BOLD = "bold"
    CODE = "code"
    STRIKETHROUGH = "strikethrough"

    # Resolver rico (strings atribuídas)
    ITALIC = "italic"
    LINK = "link"
    HIGHLIGHT = "highlight"


# Larguras fixas (início, fim). LINK tem fim variável: "](url)".
DELIMITER_WIDTHS = {
    SpanKind.BOLD: (2, 2),
    SpanKind.STRIKETHROUGH: (2, 2),
    SpanKind.HIGHLIGHT: (2, 2),
    SpanKind.CODE: (1, 1),
    SpanKind.ITALIC: (1, 1),
}


@dataclass(frozen=True)
class InlineSpan:
    """
    Trecho estilizado do texto de um bloco.

    Attributes:
        kind: Tipo de estilo
        start: Offset inicial (inclusivo) no texto original, no delimitador
        end: Offset final (exclusivo) no texto original, após o delimitador
        url: Destino do link (apenas SpanKind.LINK)
    """

    kind: SpanKind
    start: int
    end: int
    url: Optional[str] = None

    def overlaps(self, start: int, end: int) -> bool:
        """Retorna True se [start, end) intersecta este span."""
        return start < self.end and self.start < end

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        data = {"kind": self.kind.value, "start": self.start, "end": self.end}
        if self.url is not None:
            data["url"] = self.url
        return data

    def __repr__(self) -> str:
        return f"InlineSpan({self.kind.value}, {self.start}, {self.end})"
