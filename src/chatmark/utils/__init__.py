"""
Utils - Funcoes utilitarias compartilhadas.
"""

from .text_normalization import (
    normalize_line_endings,
    split_lines,
    compute_source_hash,
)
from .fuzzy_matcher import (
    calculate_similarity,
    is_fuzzy_match,
    levenshtein_distance,
)

__all__ = [
    "normalize_line_endings",
    "split_lines",
    "compute_source_hash",
    "calculate_similarity",
    "is_fuzzy_match",
    "levenshtein_distance",
]
