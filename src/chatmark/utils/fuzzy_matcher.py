# -*- coding: utf-8 -*-
"""
Fuzzy Matcher - Similaridade por distância de edição (Levenshtein).

Usado pela busca de mensagens: uma mensagem "casa" com a palavra-chave
quando a contém (ignorando caixa) ou quando a similaridade atinge o
limiar.

    similaridade = 1 - (distância de edição / maior comprimento)
"""

# Similaridade mínima para considerar match (0.6 = 60% similar)
SIMILARITY_THRESHOLD = 0.6


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Distância de edição entre duas strings.

    Número mínimo de inserções, remoções ou substituições de um caractere
    para transformar s1 em s2. Usa apenas duas linhas da tabela de DP.
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current.append(min(
                previous[j] + 1,         # remoção
                current[j - 1] + 1,      # inserção
                previous[j - 1] + cost,  # substituição
            ))
        previous = current
    return previous[-1]


def calculate_similarity(s1: str, s2: str) -> float:
    """
    Similaridade entre duas strings, em [0.0, 1.0].

    Returns:
        1.0 para strings iguais, 0.0 se uma delas é vazia
    """
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    max_length = max(len(s1), len(s2))
    return 1.0 - levenshtein_distance(s1, s2) / max_length


def is_fuzzy_match(text: str, keyword: str, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    """
    Verifica se o texto casa (aproximadamente) com a palavra-chave.

    Args:
        text: Texto onde buscar (ex: texto visível da mensagem)
        keyword: Palavra-chave digitada pelo usuário
        threshold: Similaridade mínima

    Returns:
        True se contém a palavra-chave ou se a similaridade >= threshold
    """
    if not keyword.strip():
        return True
    if not text.strip():
        return False

    lower_text = text.lower()
    lower_keyword = keyword.lower()

    # Contém literalmente: não precisa calcular distância
    if lower_keyword in lower_text:
        return True

    return calculate_similarity(lower_text, lower_keyword) >= threshold
