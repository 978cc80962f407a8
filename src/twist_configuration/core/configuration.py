# src/twist_configuration/core/configuration.py
"""
Configuração unificada do compilador Twist.

Este módulo define o `TwistConfiguration`, o agregador que acumula
decorators, components, plugins e opções declarados por todas as
bibliotecas carregadas, e expõe visões derivadas para o transformador
de código downstream.

Política de merge de um documento (ordem fixa):
    1. `libraries`    → sub-bibliotecas são carregadas antes de tudo
    2. `decorators`   → defaults de `module`/`export`/`inherits`, sobrescrita por nome
    3. `components`   → defaults de `module`/`export`, sobrescrita por nome
    4. `babelPlugins` → registro único por plugin (duplicatas são ignoradas)
    5. `options`      → `set_option`, restrito ao schema fechado
    6. `context`      → documento do contexto ativo reaplica os passos 1–6

Como sub-bibliotecas são aplicadas primeiro, um documento sempre pode
sobrescrever o que suas dependências declararam.

Invariantes:
    - Entradas acumuladas nunca são removidas, apenas adicionadas ou sobrescritas
    - Declarações são sobrescritas inteiras, nunca mescladas em profundidade
    - Documentos recebidos nunca são mutados
    - Visões derivadas são recalculadas a cada acesso e devolvidas como
      cópias profundas; mutá-las não altera o estado acumulado
    - Referências de plugins não são copiadas (a deduplicação usa identidade)

Limites explícitos:
    - Não executa o transformador de código
    - Não é thread-safe; cada instância pertence a um único chamador
"""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Tuple

from .config.defaults import BUILTIN_PATH_ALIASES, DEFAULT_CONTEXT, default_options
from .config.document import iter_entries
from .config.errors import InvalidDocumentError, UnknownOptionError
from .library.info import LibraryInfo
from .library.loader import LibraryLoader
from .library.resolver import LibraryRef
from .transformer import build_transformer_options

logger = logging.getLogger(__name__)

ROOT_OPTION = "root"


def _same_plugin(a: Any, b: Any) -> bool:
    # strings comparam por valor; demais referências por identidade
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


def _declaration(name: Any, value: Any, section: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidDocumentError(
            f"Declaração {name!r} em {section} deve ser mapa, recebido: {type(value).__name__}"
        )
    return deepcopy(dict(value))


class TwistConfiguration:
    """
    Configuração Twist para um contexto de build.

    O contexto (`"node"` por padrão, ou por exemplo `"webpack"`) seleciona
    quais overrides de `context` dos documentos são aplicados. Ambientes de
    build podem estender esta classe e substituir `transformer_builder`.

    Args:
        context_name: Nome do contexto ativo. Default: `"node"`.
        options: Opções do schema, mais `root` (caminho da biblioteca raiz;
            ausente usa o cwd, `None` não carrega nenhuma biblioteca).

    Raises:
        UnknownOptionError: Se `options` contiver chave fora do schema.
    """

    transformer_builder: ClassVar[Callable[[Dict[str, Any]], Dict[str, Any]]] = staticmethod(
        build_transformer_options
    )

    def __init__(self, context_name: Optional[str] = None, options: Optional[Dict[str, Any]] = None) -> None:
        options = dict(options or {})
        self.context = context_name or DEFAULT_CONTEXT

        self._options: Dict[str, Any] = default_options()
        self._decorators: Dict[str, Dict[str, Any]] = {}
        self._components: Dict[str, Dict[str, Any]] = {}
        self._babel_plugins: List[Tuple[Any, Any]] = []
        self._path_aliases: Dict[str, str] = dict(BUILTIN_PATH_ALIASES)

        root = options.pop(ROOT_OPTION, os.getcwd())
        for name, value in options.items():
            self.set_option(name, value)

        self._library_loader = LibraryLoader(self)
        if root is not None:
            self.add_library(root)

    # ------------------------------------------------------------------
    # Bibliotecas
    # ------------------------------------------------------------------

    @property
    def current_library(self) -> LibraryInfo:
        return self._library_loader.current_library

    @property
    def library_infos(self) -> Tuple[LibraryInfo, ...]:
        """Todas as cargas registradas, na ordem em que ocorreram."""
        return tuple(self._library_loader.library_infos)

    @property
    def library_locations(self) -> Dict[str, str]:
        """Mapa nome da biblioteca → caminho; cargas posteriores sobrescrevem."""
        return {info.name: os.fspath(info.path) for info in self._library_loader.library_infos}

    def add_library(
        self,
        library: LibraryRef,
        options: Any = None,
        *,
        parent: Optional[LibraryInfo] = None,
    ) -> "TwistConfiguration":
        """
        Adiciona uma biblioteca (e suas sub-bibliotecas) à configuração.

        Args:
            library: Nome do pacote ou caminho da biblioteca.
            options: Opções repassadas ao `.twistrc.py` da biblioteca.
            parent: Biblioteca que declarou esta. Default: a biblioteca ativa.
        """
        self._library_loader.load(library, options, parent=parent or self.current_library)
        return self

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def merge_config(
        self,
        document: Optional[Mapping[str, Any]] = None,
        *,
        library: Optional[LibraryInfo] = None,
    ) -> "TwistConfiguration":
        """
        Aplica um documento de configuração à configuração acumulada.

        Normalmente chamado pelo loader; `library` identifica a biblioteca
        dona do documento e fornece o `module` default das declarações.

        Raises:
            UnknownOptionError: Se o documento definir opção fora do schema.
            InvalidDocumentError: Se alguma seção tiver estrutura inválida.
        """
        if document is None:
            return self
        if not isinstance(document, Mapping):
            raise InvalidDocumentError(
                f"Documento de configuração deve ser mapa, recebido: {type(document).__name__}"
            )

        library = library or self.current_library

        for name, options in iter_entries(document.get("libraries")):
            self.add_library(name, options, parent=library)

        for name, value in iter_entries(document.get("decorators")):
            declaration = _declaration(name, value, "decorators")
            declaration["module"] = declaration.get("module") or library.name
            declaration["export"] = declaration.get("export") or name
            inherits = declaration.get("inherits")
            if inherits:
                if isinstance(inherits, str):
                    inherits = {"export": inherits}
                inherits = _declaration(name, inherits, "decorators.inherits")
                inherits["module"] = inherits.get("module") or library.name
                declaration["inherits"] = inherits
            self.add_decorator(name, declaration)

        for name, value in iter_entries(document.get("components")):
            declaration = _declaration(name, value, "components")
            declaration["module"] = declaration.get("module") or library.name
            declaration["export"] = declaration.get("export") or name
            self.add_component(name, declaration)

        for plugin, plugin_options in iter_entries(document.get("babelPlugins")):
            self.add_babel_plugin(plugin, plugin_options)

        for name, value in iter_entries(document.get("options")):
            self.set_option(name, value)

        context = document.get("context")
        if context is not None:
            if not isinstance(context, Mapping):
                raise InvalidDocumentError(
                    f"Seção context deve ser mapa, recebido: {type(context).__name__}"
                )
            if self.context in context:
                self.merge_config(context[self.context], library=library)

        return self

    def add_decorator(self, name: str, declaration: Dict[str, Any]) -> "TwistConfiguration":
        """Registra (ou sobrescreve por inteiro) a declaração de um decorator."""
        self._decorators[name] = declaration
        return self

    def add_component(self, name: str, declaration: Dict[str, Any]) -> "TwistConfiguration":
        """Registra (ou sobrescreve por inteiro) a declaração de um component."""
        self._components[name] = declaration
        return self

    def add_babel_plugin(self, plugin: Any, options: Any = None) -> "TwistConfiguration":
        """Registra um plugin do transformador; registros repetidos são ignorados."""
        if any(_same_plugin(existing, plugin) for existing, _ in self._babel_plugins):
            logger.debug("Plugin %r já registrado; ignorando", plugin)
            return self
        self._babel_plugins.append((plugin, {} if options is None else options))
        return self

    # ------------------------------------------------------------------
    # Opções
    # ------------------------------------------------------------------

    def set_option(self, name: str, value: Any) -> "TwistConfiguration":
        """
        Define uma opção do schema fechado.

        Raises:
            UnknownOptionError: Se `name` não for uma opção reconhecida.
        """
        if name not in self._options:
            raise UnknownOptionError(name)
        logger.debug("Opção %s = %r (contexto %s)", name, value, self.context)
        self._options[name] = value
        return self

    def get_option(self, name: str) -> Any:
        """
        Retorna uma cópia do valor atual de uma opção do schema.

        Raises:
            UnknownOptionError: Se `name` não for uma opção reconhecida.
        """
        if name not in self._options:
            raise UnknownOptionError(name)
        return deepcopy(self._options[name])

    # ------------------------------------------------------------------
    # Visões derivadas
    # ------------------------------------------------------------------

    @property
    def decorators(self) -> Dict[str, Dict[str, Any]]:
        return deepcopy(self._decorators)

    @property
    def components(self) -> Dict[str, Dict[str, Any]]:
        return deepcopy(self._components)

    @property
    def babel_plugins(self) -> List[Tuple[Any, Any]]:
        return [(plugin, deepcopy(options)) for plugin, options in self._babel_plugins]

    @property
    def resolved_options(self) -> Dict[str, Any]:
        """
        Opções completas do Twist, incluindo `aliases`, `autoImport` e `plugins`.

        Aliases embutidos prevalecem sobre localizações de bibliotecas, e
        components prevalecem sobre decorators de mesmo nome.
        """
        aliases = {**self.library_locations, **self._path_aliases}
        auto_import = {**self.decorators, **self.components}

        return {
            **deepcopy(self._options),
            "aliases": aliases,
            "autoImport": auto_import,
            "plugins": self.babel_plugins,
        }

    @property
    def transformer_options(self) -> Dict[str, Any]:
        return self.transformer_builder(self.resolved_options)


def create(context_name: Optional[str] = None, options: Optional[Dict[str, Any]] = None) -> TwistConfiguration:
    """Ponto de entrada: cria e carrega uma configuração Twist."""
    return TwistConfiguration(context_name, options)
