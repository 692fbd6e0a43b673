"""
Block Models - Estruturas de Dados para Blocos de Mensagens Markdown.

Este módulo define os nós de bloco produzidos pelo BlockSegmenter. Cada
variante é um dataclass imutável com um discriminador `block_type`, formando
uma união fechada (BlockNode).

Variantes:
=========

    | BlockType       | Classe         | Payload                         |
    |-----------------|----------------|---------------------------------|
    | heading         | Heading        | level (1..6), text              |
    | paragraph       | Paragraph      | text                            |
    | code_block      | CodeBlock      | language (pode ser ""), code    |
    | table           | Table          | headers, rows                   |
    | unordered_list  | UnorderedList  | items                           |
    | ordered_list    | OrderedList    | items (numeração 1..N no render)|
    | block_quote     | BlockQuote     | content                         |
    | horizontal_rule | HorizontalRule | (nenhum)                        |

Todos os nós carregam o range de linhas consumido (line_start, line_end),
0-based e end-exclusive, em coordenadas de linhas normalizadas. Isso permite
verificar que a sequência de blocos visita o texto fonte em ordem, sem
lacunas além de linhas em branco.

Despacho Exaustivo:
==================

    Consumidores (renderers) devem tratar TODOS os tipos de bloco. Use
    dispatch_block() com um handler por BlockType: a ausência de qualquer
    handler é detectada na chamada, mesmo que o bloco atual seja de outro
    tipo.

    ```python
    handlers = {
        BlockType.HEADING: render_heading,
        BlockType.PARAGRAPH: render_paragraph,
        ...
    }
    view = dispatch_block(node, handlers)
    ```
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Tuple, Union


class BlockType(str, Enum):
    """Tipos de bloco de uma mensagem."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"
    TABLE = "table"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    BLOCK_QUOTE = "block_quote"
    HORIZONTAL_RULE = "horizontal_rule"


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.HEADING, init=False)


@dataclass(frozen=True)
class Paragraph:
    text: str
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.PARAGRAPH, init=False)


@dataclass(frozen=True)
class CodeBlock:
    language: str
    code: str
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.CODE_BLOCK, init=False)


@dataclass(frozen=True)
class Table:
    """
    Tabela com cabeçalho e linhas de dados.

    Invariante: toda linha tem exatamente len(headers) células. O
    segmentador garante isso completando com "" ou truncando.
    """

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.TABLE, init=False)

    @property
    def column_count(self) -> int:
        return len(self.headers)


@dataclass(frozen=True)
class UnorderedList:
    items: Tuple[str, ...]
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.UNORDERED_LIST, init=False)


@dataclass(frozen=True)
class OrderedList:
    items: Tuple[str, ...]
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.ORDERED_LIST, init=False)


@dataclass(frozen=True)
class BlockQuote:
    content: str
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.BLOCK_QUOTE, init=False)


@dataclass(frozen=True)
class HorizontalRule:
    line_start: int = field(default=0, compare=False)
    line_end: int = field(default=0, compare=False)
    block_type: BlockType = field(default=BlockType.HORIZONTAL_RULE, init=False)


BlockNode = Union[
    Heading,
    Paragraph,
    CodeBlock,
    Table,
    UnorderedList,
    OrderedList,
    BlockQuote,
    HorizontalRule,
]


def dispatch_block(node: BlockNode, handlers: Mapping[BlockType, Callable[[Any], Any]]) -> Any:
    """
    Chama o handler correspondente ao tipo do bloco.

    Raises:
        KeyError: se `handlers` não cobre todos os BlockType
    """
    missing = [bt.value for bt in BlockType if bt not in handlers]
    if missing:
        raise KeyError(f"Handlers ausentes para tipos de bloco: {', '.join(missing)}")
    return handlers[node.block_type](node)


def block_to_dict(node: BlockNode) -> dict:
    """Converte um nó de bloco para dicionário."""
    data: dict = {
        "block_type": node.block_type.value,
        "line_start": node.line_start,
        "line_end": node.line_end,
    }
    if isinstance(node, Heading):
        data.update(level=node.level, text=node.text)
    elif isinstance(node, Paragraph):
        data.update(text=node.text)
    elif isinstance(node, CodeBlock):
        data.update(language=node.language, code=node.code)
    elif isinstance(node, Table):
        data.update(headers=list(node.headers), rows=[list(r) for r in node.rows])
    elif isinstance(node, (UnorderedList, OrderedList)):
        data.update(items=list(node.items))
    elif isinstance(node, BlockQuote):
        data.update(content=node.content)
    return data
