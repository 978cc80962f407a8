# src/twist_configuration/__init__.py
"""
Twist Configuration — carregamento e merge da configuração do compilador Twist.

Este pacote raiz define o namespace público da configuração Twist:
bibliotecas declaram decorators, components, plugins e opções em
arquivos `.twistrc`, e o `TwistConfiguration` combina tudo em uma única
configuração consumida pelo transformador de código.

Arquitetura em alto nível:
    - core.library       → resolução, identidade e carregamento de bibliotecas
    - core.config        → schema de opções, leitura de documentos e exceções
    - core.configuration → merge da configuração acumulada
    - core.transformer   → configuração do transformador downstream
"""

from .core.configuration import TwistConfiguration, create
from .core.config.errors import (
    ConfigParseError,
    InvalidDocumentError,
    ManifestParseError,
    ResolutionError,
    TwistConfigError,
    UnknownOptionError,
    VersionConflictError,
)
from .core.library.info import ROOT_LIBRARY, LibraryInfo

__all__ = [
    "TwistConfiguration",
    "create",
    "LibraryInfo",
    "ROOT_LIBRARY",
    "TwistConfigError",
    "ResolutionError",
    "ManifestParseError",
    "VersionConflictError",
    "ConfigParseError",
    "InvalidDocumentError",
    "UnknownOptionError",
]
