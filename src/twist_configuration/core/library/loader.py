# src/twist_configuration/core/library/loader.py
"""
Carregamento recursivo de bibliotecas Twist.

Este módulo define o `LibraryLoader`, responsável por carregar
bibliotecas em profundidade, garantindo que duas versões da mesma
biblioteca não sejam carregadas simultaneamente.

Fluxo de `load`:
    1. Resolve o nome/caminho para o diretório da biblioteca
    2. Ignora cargas repetidas com o mesmo `(path, options)`
    3. Registra a nova biblioteca no registry
    4. Detecta conflito de versão com bibliotecas já registradas
    5. Lê o arquivo de configuração e o entrega ao merger
    6. Bibliotecas sem arquivo de configuração geram apenas um warning

Decisões arquiteturais:
    - A biblioteca ativa é passada explicitamente (`parent=` no `load`,
      `library=` no `merge_config`), nunca lida de estado compartilhado
    - O registro que falhou por conflito permanece no registry para
      inspeção posterior (sem rollback)
    - A pilha interna existe apenas para expor `current_library`

Invariantes:
    - O registry é append-only e preserva a ordem de carregamento
    - Não existem dois registros com o mesmo `path` e `options` iguais
    - A pilha de carregamento é restaurada mesmo quando o merge falha

Limites explícitos:
    - Não aplica declarações (responsabilidade do merger)
    - Não faz cache entre instâncias
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..config.errors import VersionConflictError
from ..config.files import load_config_document
from .info import ROOT_LIBRARY, LibraryInfo
from .resolver import LibraryRef, resolve_root

logger = logging.getLogger(__name__)


class MergeTarget(Protocol):
    def merge_config(self, document: Optional[Dict[str, Any]] = None, *, library: Optional[LibraryInfo] = None) -> Any:
        ...


class LibraryLoader:
    """
    Orquestra o carregamento de bibliotecas para um único merger.

    Args:
        configuration: Objeto que recebe os documentos carregados via
            `merge_config(document, library=...)`.
    """

    def __init__(self, configuration: MergeTarget) -> None:
        self.configuration = configuration
        self.library_infos: List[LibraryInfo] = []
        self._loading: List[LibraryInfo] = []

    @property
    def current_library(self) -> LibraryInfo:
        """Biblioteca em carregamento, ou o sentinel raiz quando ocioso."""
        return self._loading[-1] if self._loading else ROOT_LIBRARY

    def find(self, library_path: Path, options: Any) -> Optional[LibraryInfo]:
        """Registro já carregado com o mesmo caminho e opções iguais, se houver."""
        for info in self.library_infos:
            if info.path == library_path and info.options == options:
                return info
        return None

    def find_conflict(self, library: LibraryInfo) -> Optional[LibraryInfo]:
        """
        Primeiro registro de mesmo nome e versão diferente.

        Duplicatas de versão idêntica em caminhos distintos não são conflito.
        """
        for info in self.library_infos:
            if info is not library and info.name == library.name and info.version != library.version:
                return info
        return None

    def load(
        self,
        library: LibraryRef,
        options: Any = None,
        *,
        parent: Optional[LibraryInfo] = None,
    ) -> LibraryInfo:
        """
        Carrega uma biblioteca e, recursivamente, as bibliotecas que ela declara.

        Args:
            library: Nome do pacote ou caminho da biblioteca.
            options: Opções repassadas a um `.twistrc.py`. Default: `{}`.
            parent: Biblioteca que declarou esta. Default: sentinel raiz.

        Returns:
            LibraryInfo: O registro carregado (ou o já existente, em cargas repetidas).

        Raises:
            ResolutionError: Se a biblioteca não puder ser localizada.
            ManifestParseError: Se o manifest estiver malformado.
            VersionConflictError: Se outra versão da biblioteca já foi carregada.
            ConfigParseError: Se o arquivo de configuração for inválido.
        """
        options = {} if options is None else options
        parent = ROOT_LIBRARY if parent is None else parent

        base_dir = parent.path if parent.path is not None else None
        library_path = resolve_root(library, base_dir=base_dir)

        existing = self.find(library_path, options)
        if existing is not None:
            logger.debug("Biblioteca %s já carregada; ignorando", library_path)
            return existing

        info = LibraryInfo.from_path(library_path, options, parent)
        self.library_infos.append(info)

        conflict = self.find_conflict(info)
        if conflict is not None:
            raise VersionConflictError(info, conflict)

        logger.debug("Carregando %s a partir de %s", info.describe(), library_path)

        self._loading.append(info)
        try:
            document = load_config_document(library_path, options)
            if document is None:
                logger.warning(
                    "Arquivo .twistrc não encontrado para %s - verifique se a biblioteca "
                    "possui uma configuração na raiz",
                    library,
                )
            else:
                self.configuration.merge_config(document, library=info)
        finally:
            self._loading.pop()

        return info
