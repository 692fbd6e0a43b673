"""
Configurações do parser de Markdown de mensagens.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class ParserConfig:
    """Configuração do parser (imutável, segura para uso entre threads)."""

    # Inline: False = resolver por nós (bold, code, strikethrough)
    #         True  = resolver rico (+ italic, link, highlight)
    rich_inline: bool = False

    # Títulos também recebem spans inline (por padrão só parágrafo/lista/citação)
    resolve_headings: bool = False

    # Roda o DocumentValidator após o build e loga violações como warning
    validate_invariants: bool = False

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Carrega configuração de variáveis de ambiente."""
        return cls(
            rich_inline=_env_flag("CHATMARK_RICH_INLINE"),
            resolve_headings=_env_flag("CHATMARK_RESOLVE_HEADINGS"),
            validate_invariants=_env_flag("CHATMARK_VALIDATE_INVARIANTS"),
        )


# Singleton
config = ParserConfig.from_env()
