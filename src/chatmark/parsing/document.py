"""
Document - Resultado completo do parsing de uma mensagem.

Estrutura:
=========

    ┌─────────────────────────────────────────────────────────────────┐
    │                          Document                               │
    ├─────────────────────────────────────────────────────────────────┤
    │                                                                 │
    │  blocks: tuple[ResolvedBlock]   (ordem do texto fonte)          │
    │  ┌──────────────────────────────────────────────────────────┐  │
    │  │ ResolvedBlock(node=Heading(...),   inline=())            │  │
    │  │ ResolvedBlock(node=Paragraph(...), inline=(("text",..),))│  │
    │  │ ResolvedBlock(node=UnorderedList,  inline=(("items",     │  │
    │  │                                      ((..), (..))),))    │  │
    │  └──────────────────────────────────────────────────────────┘  │
    │                                                                 │
    │  source_text: texto cru recebido                               │
    │  source_hash: SHA256 do texto normalizado                      │
    └─────────────────────────────────────────────────────────────────┘

Campos de `inline` (pares campo, spans; construído a partir de um dict):

    | Bloco          | Chave     | Valor                       |
    |----------------|-----------|-----------------------------|
    | Paragraph      | "text"    | tuple[InlineSpan, ...]      |
    | Heading (opt.) | "text"    | tuple[InlineSpan, ...]      |
    | BlockQuote     | "content" | tuple[InlineSpan, ...]      |
    | Listas         | "items"   | tuple[tuple[InlineSpan, ...]] |

Um Document é um snapshot imutável: parsear o mesmo texto com a mesma
configuração produz um Document igual.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .block_models import BlockNode, BlockType, block_to_dict
from .inline_models import InlineSpan


InlineFields = Tuple[Tuple[str, tuple], ...]


def _freeze_inline(inline) -> InlineFields:
    """Converte {campo: spans} (ou pares) em tuplas aninhadas imutáveis."""
    pairs = inline.items() if isinstance(inline, dict) else inline
    frozen = []
    for field_name, spans in pairs:
        if field_name == "items":
            frozen.append((field_name, tuple(tuple(item) for item in spans)))
        else:
            frozen.append((field_name, tuple(spans)))
    return tuple(frozen)


@dataclass(frozen=True)
class ResolvedBlock:
    """
    Nó de bloco com os spans inline resolvidos por campo.

    `inline` aceita um dict na construção, mas é guardado como tupla de
    pares (campo, spans) para que o bloco seja imutável e hashable.
    """

    node: BlockNode
    inline: InlineFields = ()

    def __post_init__(self):
        object.__setattr__(self, "inline", _freeze_inline(self.inline))

    @property
    def block_type(self) -> BlockType:
        return self.node.block_type

    def spans_for(self, field_name: str, index: Optional[int] = None) -> Tuple[InlineSpan, ...]:
        """
        Retorna os spans de um campo.

        Args:
            field_name: "text", "content" ou "items"
            index: Índice do item (obrigatório para "items")

        Returns:
            Tupla de spans (vazia se o campo não foi resolvido)
        """
        spans = dict(self.inline).get(field_name)
        if spans is None:
            return ()
        if field_name == "items":
            if index is None or not 0 <= index < len(spans):
                return ()
            return spans[index]
        return spans

    def resolved_fields(self) -> Iterator[Tuple[str, Optional[int], str, Tuple[InlineSpan, ...]]]:
        """Itera (campo, índice do item, texto, spans) para cada texto resolvido."""
        for field_name, spans in self.inline:
            if field_name == "items":
                for index, item_text in enumerate(self.node.items):
                    yield field_name, index, item_text, spans[index]
            else:
                yield field_name, None, getattr(self.node, field_name), spans

    @property
    def span_count(self) -> int:
        return sum(len(spans) for _, _, _, spans in self.resolved_fields())

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        data = block_to_dict(self.node)
        inline: dict = {}
        for field_name, spans in self.inline:
            if field_name == "items":
                inline[field_name] = [[s.to_dict() for s in item] for item in spans]
            else:
                inline[field_name] = [s.to_dict() for s in spans]
        data["inline"] = inline
        return data


@dataclass(frozen=True)
class Document:
    """
    Documento parseado de uma mensagem.

    Attributes:
        blocks: Blocos resolvidos na ordem do texto fonte
        source_text: Texto original da mensagem
        source_hash: Hash do texto normalizado (identidade para cache)
    """

    blocks: Tuple[ResolvedBlock, ...] = ()
    source_text: str = ""
    source_hash: str = ""

    @property
    def nodes(self) -> List[BlockNode]:
        """Nós de bloco sem os spans."""
        return [block.node for block in self.blocks]

    def blocks_of_type(self, block_type: BlockType) -> List[ResolvedBlock]:
        """Retorna os blocos de um tipo, na ordem do documento."""
        return [block for block in self.blocks if block.block_type == block_type]

    @property
    def span_count(self) -> int:
        return sum(block.span_count for block in self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[ResolvedBlock]:
        return iter(self.blocks)

    def __getitem__(self, index: int) -> ResolvedBlock:
        return self.blocks[index]

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        return {
            "source_hash": self.source_hash,
            "block_count": len(self.blocks),
            "span_count": self.span_count,
            "blocks": [block.to_dict() for block in self.blocks],
        }

    def to_schema(self):
        """Converte para o schema Pydantic (DocumentSchema)."""
        from .schemas import DocumentSchema

        return DocumentSchema.model_validate(self.to_dict())

    def to_plain_text(self) -> str:
        """Texto puro para cópia (delimitadores removidos)."""
        from ..utils.delimiters import to_plain_text

        return to_plain_text(self)

    def __repr__(self) -> str:
        return f"Document(blocks={len(self.blocks)}, spans={self.span_count})"
