# src/twist_configuration/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Twist.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a resolução de bibliotecas, leitura de manifests, carregamento de
arquivos `.twistrc` e merge da configuração acumulada.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário
    - Dados relevantes para diagnóstico ficam disponíveis como atributos

Invariantes:
    - Todas as exceções de configuração herdam de `TwistConfigError`
    - Nenhuma exceção realiza retry, rollback ou fallback

Limites explícitos:
    - Não representa erros do transformador de código downstream
    - Não captura exceções levantadas por código de `.twistrc.py`
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from ..library.info import LibraryInfo


class TwistConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Twist.

    Todas as exceções levantadas durante resolução, carregamento e merge
    de bibliotecas devem herdar desta classe, permitindo captura genérica
    de falhas de configuração.
    """


class ResolutionError(TwistConfigError):
    """
    Exceção levantada quando uma biblioteca não pode ser localizada.

    Ocorre quando o nome (ou caminho) informado não corresponde a nenhum
    diretório contendo um manifest `package.json`.

    Decisões arquiteturais:
        - A resolução não tenta instalar nem adivinhar bibliotecas
        - A mensagem sempre nomeia a biblioteca não resolvida
    """

    def __init__(self, library: str, base_dir: Optional[Path] = None) -> None:
        self.library = library
        self.base_dir = base_dir
        super().__init__(f"Falha ao resolver {library} - a biblioteca está instalada?")


class ManifestParseError(TwistConfigError):
    """
    Exceção levantada quando o manifest de uma biblioteca resolvida é
    inexistente ou malformado.

    Como a resolução depende da presença do manifest, a ausência dele
    neste estágio indica erro de programação, e não caso recuperável.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Manifest inválido em {path}: {reason}")


class VersionConflictError(TwistConfigError):
    """
    Exceção levantada quando duas bibliotecas carregadas compartilham o
    mesmo nome, mas não a mesma versão.

    A mensagem inclui as duas cadeias de carregamento (a nova primeiro,
    a já registrada depois), permitindo identificar os caminhos que
    levaram às versões incompatíveis.

    Invariantes:
        - `library` é o registro recém-carregado
        - `conflict` é o registro previamente presente no registry
    """

    def __init__(self, library: "LibraryInfo", conflict: "LibraryInfo") -> None:
        self.library = library
        self.conflict = conflict
        super().__init__(
            f"Tentativa de carregar {library.name} {library.version}, mas "
            f"{conflict.name} {conflict.version} já foi carregada:\n\n"
            f"{library.get_load_chain_trace()}\n\n"
            f"{conflict.get_load_chain_trace()}\n\n"
        )


class ConfigParseError(TwistConfigError):
    """
    Exceção levantada quando um arquivo de configuração existe mas não
    pode ser interpretado.

    A mensagem sempre nomeia o caminho exato do arquivo.
    """

    def __init__(self, path: Union[str, Path], reason: str = "verifique se o conteúdo é válido") -> None:
        self.path = Path(path)
        super().__init__(f"Arquivo de configuração inválido em {path} - {reason}")


class InvalidDocumentError(TwistConfigError):
    """
    Exceção levantada quando um documento de configuração possui estrutura
    incompatível (raiz que não é mapa, seção que não é mapa nem lista).

    Decisões arquiteturais:
        - Não tenta normalizar ou encapsular estruturas inválidas
    """


class UnknownOptionError(TwistConfigError):
    """
    Exceção levantada ao ler ou definir uma opção fora do schema fechado.

    O schema de opções não é extensível por documentos de configuração;
    nenhuma mutação ocorre quando esta exceção é levantada.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A opção de configuração {name} não está definida.")
