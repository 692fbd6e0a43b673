# -*- coding: utf-8 -*-
"""
Text Normalization - Funções utilitárias para o texto fonte das mensagens.

Funções de normalização de quebras de linha e hash determinístico do texto
fonte, usadas pelo segmentador de blocos e pelo montador de documentos.

IMPORTANTE: a normalização NÃO altera nenhum caractere além dos terminadores
de linha. Offsets de spans inline são sempre relativos ao texto do bloco,
nunca ao texto cru, então CRLF -> LF não invalida nenhuma posição reportada.
"""

import hashlib
from typing import List


def normalize_line_endings(text: str) -> str:
    """
    Normaliza line endings para LF (\\n).

    Regras aplicadas (em ordem):
    1. CRLF -> LF
    2. CR isolado -> LF

    Args:
        text: Texto cru da mensagem

    Returns:
        Texto com apenas \\n como terminador
    """
    if not text:
        return ""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> List[str]:
    """
    Divide o texto em linhas lógicas (após normalizar line endings).

    Texto vazio retorna lista vazia. Um \\n final NÃO gera linha extra,
    então "a\\nb\\n" e "a\\nb" produzem as mesmas linhas.
    """
    text = normalize_line_endings(text)
    if not text:
        return []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_blank(line: str) -> bool:
    """Retorna True se a linha só contém whitespace."""
    return not line.strip()


def compute_source_hash(text: str) -> str:
    """
    Computa hash SHA256 do texto fonte normalizado.

    Usado como identidade do Document: o mesmo texto sempre gera o mesmo
    hash, o que permite cache de renderização por mensagem.

    Surrogates isolados (possíveis em texto vindo de UTF-16) são codificados
    com "surrogatepass" para que o hash nunca falhe.

    Returns:
        Hash SHA256 como string hexadecimal (64 chars)
    """
    normalized = normalize_line_endings(text)
    return hashlib.sha256(normalized.encode("utf-8", "surrogatepass")).hexdigest()
