"""
Schemas Pydantic para exportação de Documents.

Visão JSON-friendly de um Document, usada para debug e para renderers em
outro processo. Nada aqui é persistido pelo pacote.

Validadores:
===========

| Validador            | Campo         | Regra                              |
|----------------------|---------------|------------------------------------|
| validate_range       | start / end   | 0 <= start < end                   |
| validate_url         | url           | obrigatório apenas para link       |
| validate_level       | level         | 1..6 (apenas heading)              |
| validate_table_shape | rows          | len(row) == len(headers)           |
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from .block_models import BlockType
from .inline_models import SpanKind


class InlineSpanSchema(BaseModel):
    """Span inline serializado."""

    kind: SpanKind
    start: int = Field(..., ge=0, description="Offset inicial (inclusivo) no texto do campo")
    end: int = Field(..., ge=0, description="Offset final (exclusivo) no texto do campo")
    url: Optional[str] = Field(None, description="Destino do link (apenas kind=link)")

    @model_validator(mode="after")
    def validate_range(self) -> "InlineSpanSchema":
        if self.start >= self.end:
            raise ValueError(f"start deve ser < end: start={self.start}, end={self.end}")
        return self

    @model_validator(mode="after")
    def validate_url(self) -> "InlineSpanSchema":
        if self.kind == SpanKind.LINK and not self.url:
            raise ValueError("span do tipo link exige url")
        if self.kind != SpanKind.LINK and self.url is not None:
            raise ValueError(f"url só é permitida em links, não em {self.kind.value}")
        return self


class BlockSchema(BaseModel):
    """Bloco serializado (campos do payload variam com block_type)."""

    block_type: BlockType
    line_start: int = Field(..., ge=0)
    line_end: int = Field(..., ge=0)

    level: Optional[int] = None
    text: Optional[str] = None
    language: Optional[str] = None
    code: Optional[str] = None
    headers: Optional[List[str]] = None
    rows: Optional[List[List[str]]] = None
    items: Optional[List[str]] = None
    content: Optional[str] = None

    inline: Dict[str, Union[List[InlineSpanSchema], List[List[InlineSpanSchema]]]] = Field(
        default_factory=dict,
        description="Spans por campo resolvido: text, content ou items",
    )

    @model_validator(mode="after")
    def validate_level(self) -> "BlockSchema":
        if self.block_type == BlockType.HEADING:
            if self.level is None or not 1 <= self.level <= 6:
                raise ValueError(f"heading exige level entre 1 e 6: {self.level}")
        return self

    @model_validator(mode="after")
    def validate_table_shape(self) -> "BlockSchema":
        if self.block_type == BlockType.TABLE:
            width = len(self.headers or [])
            for index, row in enumerate(self.rows or []):
                if len(row) != width:
                    raise ValueError(
                        f"linha {index} da tabela tem {len(row)} células, cabeçalho tem {width}"
                    )
        return self


class DocumentSchema(BaseModel):
    """Document serializado."""

    source_hash: str
    block_count: int = Field(..., ge=0)
    span_count: int = Field(..., ge=0)
    blocks: List[BlockSchema] = Field(default_factory=list)
