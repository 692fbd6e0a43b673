"""
DocumentValidator - Verifica as invariantes de um Document.

Checks:
======

| Check              | Regra                                                   |
|--------------------|---------------------------------------------------------|
| span_bounds        | 0 <= start < end <= len(texto do campo)                 |
| span_disjointness  | spans de um mesmo campo não se intersectam              |
| span_order         | spans ordenados por start                               |
| table_shape        | toda linha da tabela tem len(headers) células           |
| line_order         | ranges de linhas dos blocos estritamente crescentes     |
| line_coverage      | linha fora de qualquer bloco é sempre linha em branco   |

Uso:
    from chatmark.parsing import DocumentValidator

    validator = DocumentValidator()
    violations = validator.validate(document)

    for v in violations:
        logger.warning(v.message)

    validator.assert_valid(document)  # levanta DocumentInvariantError
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..utils.text_normalization import is_blank, split_lines
from .block_models import BlockNode, Table
from .document import Document
from .inline_models import InlineSpan

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Violação de invariante encontrada."""
    check: str
    message: str
    block_index: Optional[int] = None
    field_name: Optional[str] = None
    item_index: Optional[int] = None


class DocumentInvariantError(Exception):
    """Document viola uma ou mais invariantes."""

    def __init__(self, violations: List[ValidationResult]):
        self.violations = violations
        super().__init__(
            f"{len(violations)} violação(ões) de invariante: "
            + "; ".join(v.message for v in violations)
        )


def check_spans(text: str, spans: Sequence[InlineSpan]) -> List[ValidationResult]:
    """
    Valida limites, ordem e disjunção de spans de um único texto.

    Returns:
        Lista de violações (vazia se válido)
    """
    violations: List[ValidationResult] = []

    for span in spans:
        if not 0 <= span.start < span.end <= len(text):
            violations.append(ValidationResult(
                check="span_bounds",
                message=f"span {span!r} fora dos limites do texto (len={len(text)})",
            ))

    for prev, curr in zip(spans, spans[1:]):
        if curr.start < prev.start:
            violations.append(ValidationResult(
                check="span_order",
                message=f"span {curr!r} aparece depois de {prev!r}",
            ))

    for i, a in enumerate(spans):
        for b in spans[i + 1:]:
            if a.overlaps(b.start, b.end):
                violations.append(ValidationResult(
                    check="span_disjointness",
                    message=f"spans {a!r} e {b!r} se intersectam",
                ))

    return violations


def check_line_coverage(text: str, nodes: Sequence[BlockNode]) -> List[ValidationResult]:
    """
    Valida que os blocos visitam as linhas em ordem, sem sobreposição, e que
    toda linha não consumida é uma linha em branco.
    """
    violations: List[ValidationResult] = []
    lines = split_lines(text)
    covered = [False] * len(lines)
    previous_end = 0

    for index, node in enumerate(nodes):
        if node.line_start < previous_end or node.line_end <= node.line_start:
            violations.append(ValidationResult(
                check="line_order",
                message=(
                    f"bloco {index} ({node.block_type.value}) com range "
                    f"[{node.line_start}, {node.line_end}) fora de ordem"
                ),
                block_index=index,
            ))
        previous_end = max(previous_end, node.line_end)
        for line_no in range(node.line_start, min(node.line_end, len(lines))):
            covered[line_no] = True

    for line_no, line in enumerate(lines):
        if not covered[line_no] and not is_blank(line):
            violations.append(ValidationResult(
                check="line_coverage",
                message=f"linha {line_no} não vazia não pertence a nenhum bloco",
            ))

    return violations


def check_table_shape(table: Table) -> List[ValidationResult]:
    """Valida que toda linha tem len(headers) células."""
    width = len(table.headers)
    return [
        ValidationResult(
            check="table_shape",
            message=f"linha {row_index} tem {len(row)} células, cabeçalho tem {width}",
        )
        for row_index, row in enumerate(table.rows)
        if len(row) != width
    ]


class DocumentValidator:
    """Valida um Document completo."""

    def validate(self, document: Document) -> List[ValidationResult]:
        """
        Roda todos os checks.

        Returns:
            Lista de violações (vazia se o documento é válido)
        """
        violations: List[ValidationResult] = []

        for block_index, block in enumerate(document.blocks):
            if isinstance(block.node, Table):
                for v in check_table_shape(block.node):
                    v.block_index = block_index
                    violations.append(v)

            for field_name, item_index, text, spans in block.resolved_fields():
                for v in check_spans(text, spans):
                    v.block_index = block_index
                    v.field_name = field_name
                    v.item_index = item_index
                    violations.append(v)

        violations.extend(check_line_coverage(document.source_text, document.nodes))

        for v in violations:
            logger.warning(f"Invariant violation [{v.check}]: {v.message}")

        return violations

    def assert_valid(self, document: Document):
        """Levanta DocumentInvariantError se houver qualquer violação."""
        violations = self.validate(document)
        if violations:
            raise DocumentInvariantError(violations)
