# src/twist_configuration/core/config/document.py
"""
Normalização de documentos de configuração do Twist.

Um documento de configuração (conteúdo de um `.twistrc`) aceita, em cada
seção de declarações (`libraries`, `decorators`, `components`,
`babelPlugins`, `options`), duas formas de entrada:

    - um mapa `{nome: declaração}`
    - uma lista ordenada de pares `[nome, declaração]` ou nomes simples

Este módulo converte ambas as formas em uma única sequência canônica de
pares `(nome, declaração)` antes de qualquer lógica de merge, de modo que
o merger nunca precise ramificar pelo formato de entrada.

Também define o "Document Provider": o valor exportado por um
`.twistrc.py` pode ser o próprio documento ou uma função que recebe as
opções da biblioteca e devolve o documento.

Invariantes:
    - A ordem de listas é preservada; a ordem de mapas segue a inserção
    - Entradas vazias em listas são ignoradas
    - Declarações ausentes (ou `None`) em listas são normalizadas para `{}`
    - Valores falsos explícitos (`False`, `0`) são preservados

Limites explícitos:
    - Não aplica defaults de `module`/`export`
    - Não lê arquivos
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Protocol, Tuple

from .errors import InvalidDocumentError

DOCUMENT_SECTIONS = ("libraries", "decorators", "components", "babelPlugins", "options", "context")

Entry = Tuple[Any, Any]


def iter_entries(section: Any) -> List[Entry]:
    """
    Converte uma seção de declarações em lista canônica de pares.

    Args:
        section: Mapa, lista/tupla ou None.

    Returns:
        List[Tuple[Any, Any]]: Pares `(nome, declaração)` na ordem de aplicação.

    Raises:
        InvalidDocumentError: Se a seção não for mapa nem sequência.
    """
    if section is None:
        return []

    if isinstance(section, Mapping):
        return list(section.items())

    if isinstance(section, (list, tuple)):
        entries: List[Entry] = []
        for entry in section:
            if not entry:
                continue
            if isinstance(entry, (list, tuple)):
                declaration = entry[1] if len(entry) > 1 else None
                entries.append((entry[0], {} if declaration is None else declaration))
            else:
                entries.append((entry, {}))
        return entries

    raise InvalidDocumentError(
        f"Seção de declarações deve ser mapa ou lista, recebido: {type(section).__name__}"
    )


class DocumentProvider(Protocol):
    def provide(self, options: Any) -> Any:
        ...


@dataclass(frozen=True)
class StaticDocument:
    """Documento já materializado; as opções da biblioteca são ignoradas."""

    document: Any

    def provide(self, options: Any) -> Any:
        return self.document


@dataclass(frozen=True)
class CallableDocument:
    """Função `(options) -> documento` exportada por um `.twistrc.py`."""

    factory: Callable[[Any], Any]

    def provide(self, options: Any) -> Any:
        return self.factory(options)


def provider_for(value: Any) -> DocumentProvider:
    """
    Escolhe a variante de Document Provider pelo tipo do valor exportado.

    Decisões arquiteturais:
        - Valores chamáveis são tratados como `(options) -> documento`
        - Qualquer outro valor é o próprio documento
    """
    if callable(value):
        return CallableDocument(value)
    return StaticDocument(value)


def ensure_document(value: Any, source: str) -> Dict[str, Any]:
    """
    Valida o tipo raiz de um documento carregado.

    Conteúdo vazio (`None`) é interpretado como documento vazio.

    Raises:
        InvalidDocumentError: Se a raiz não for um mapa.
    """
    if value is None:
        return {}

    if not isinstance(value, Mapping):
        raise InvalidDocumentError(
            f"Documento de configuração em {source} deve ser mapa, recebido: {type(value).__name__}"
        )

    return dict(value)
