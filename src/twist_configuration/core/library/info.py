# src/twist_configuration/core/library/info.py
"""
Registro de identidade de uma biblioteca carregada.

Este módulo define o `LibraryInfo`, a estrutura canônica que descreve uma
biblioteca no registry do loader: caminho, nome, versão, opções de
carregamento e a biblioteca que a carregou (parent).

A cadeia de parents forma uma lista ligada acíclica que termina no
sentinel raiz (`(root)`), usada para diagnósticos de conflito de versão.

Invariantes:
    - Todo registro, exceto o sentinel, possui `path`
    - `name`, `version`, `path` e `parent` são imutáveis após construção
    - A cadeia de parents sempre termina no sentinel
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional

from .resolver import read_manifest

ROOT_NAME = "(root)"

_TRACE_INDENT = 4
_TRACE_STEP = 2


@dataclass(frozen=True, eq=False)
class LibraryInfo:
    """
    Identidade imutável de uma biblioteca no registry de carregamento.

    A igualdade é por identidade de objeto; o loader compara explicitamente
    `(path, options)` para deduplicação e `(name, version)` para conflitos.
    """

    path: Optional[Path]
    name: Optional[str]
    version: Optional[str]
    options: Any = field(default_factory=dict)
    parent: Optional["LibraryInfo"] = field(default=None, repr=False)

    @classmethod
    def root(cls) -> "LibraryInfo":
        """Sentinel que representa "nenhuma biblioteca em carregamento"."""
        return cls(path=None, name=ROOT_NAME, version="")

    @classmethod
    def from_path(cls, path: Path, options: Any, parent: Optional["LibraryInfo"]) -> "LibraryInfo":
        """
        Constrói o registro lendo nome e versão do manifest em `path`.

        Raises:
            ManifestParseError: Se o manifest estiver ausente ou malformado.
        """
        name, version = read_manifest(path)
        return cls(path=Path(path), name=name, version=version, options=options, parent=parent)

    @property
    def is_root(self) -> bool:
        return self.path is None and self.parent is None

    def iter_chain(self) -> Iterator["LibraryInfo"]:
        """Percorre este registro e seus ancestrais, terminando no sentinel."""
        library: Optional[LibraryInfo] = self
        while library is not None:
            yield library
            library = library.parent

    def describe(self) -> str:
        """Nome e versão para mensagens de log; só o nome quando não há versão."""
        return f"{self.name} {self.version}" if self.version else f"{self.name}"

    def get_load_chain_trace(self) -> str:
        """
        Descreve quem carregou esta biblioteca, no formato de um stack trace.

        Exemplo::

                LibraryB 4.0
                  └─ loaded by LibraryA 1.0
                    └─ loaded by (root)
        """
        lines = []
        for depth, library in enumerate(self.iter_chain()):
            prefix = " " * (_TRACE_INDENT + depth * _TRACE_STEP)
            line = library.describe()
            if depth:
                line = f"└─ loaded by {line}"
            lines.append(prefix + line)
        return "\n".join(lines)


ROOT_LIBRARY = LibraryInfo.root()
