"""
Configuração global do pytest para testes do chatmark.

Este arquivo configura o PYTHONPATH para que os imports funcionem sem
instalar o pacote.
"""

import sys
from pathlib import Path

# Adiciona o diretório src ao path para que os imports funcionem
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))
