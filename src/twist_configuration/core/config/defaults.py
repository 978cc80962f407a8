# src/twist_configuration/core/config/defaults.py
"""
Schema fechado de opções e aliases embutidos da configuração Twist.

As chaves de `DEFAULT_OPTIONS` são as únicas opções reconhecidas;
documentos de configuração podem sobrescrever valores, mas nunca
adicionar novas chaves.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONTEXT = "node"

DEFAULT_OPTIONS: Dict[str, Any] = {
    # Injeção dos helpers de runtime
    "includeBabelRuntime": False,
    # Metadados de localização para nós JSX
    "jsxSourceLines": False,
    # Só tem efeito com includeBabelRuntime
    "polyfill": True,
    "regenerator": False,
    "targets": {"node": "current"},
    "transformImports": True,
    "useBabelModuleResolver": True,
}

_THIRD_PARTY_DIR = Path(__file__).resolve().parent.parent.parent / "third_party"

# Helpers de runtime conhecidos por quebrar com classes nativas
BUILTIN_PATH_ALIASES: Dict[str, str] = {
    "babel-runtime/helpers/inherits": str(_THIRD_PARTY_DIR / "inherits.js"),
}


def default_options() -> Dict[str, Any]:
    """Retorna uma cópia independente das opções padrão."""
    return deepcopy(DEFAULT_OPTIONS)
