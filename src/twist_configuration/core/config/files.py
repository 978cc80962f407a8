# src/twist_configuration/core/config/files.py
"""
Localização e leitura do arquivo de configuração de uma biblioteca.

Cada biblioteca pode carregar, na raiz do seu diretório, exatamente um
arquivo de configuração. Os candidatos são verificados na ordem abaixo e
o primeiro existente é utilizado:

    - `.twistrc`       → JSON com comentários
    - `.twistrc.yaml`  → YAML
    - `.twistrc.yml`   → YAML
    - `.twistrc.py`    → módulo Python (configuração dinâmica)

Decisões arquiteturais:
    - Ausência de arquivo não é erro: retorna `None`
    - Arquivo existente e malformado é erro fatal (`ConfigParseError`)
    - Arquivo vazio produz documento vazio, distinto de "não encontrado"
    - Exceções do código de um `.twistrc.py` propagam sem encapsulamento

Limites explícitos:
    - Não aplica o documento à configuração acumulada
    - Não resolve bibliotecas nem lê manifests
"""

from __future__ import annotations

import hashlib
import importlib.util
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .document import ensure_document, provider_for
from .errors import ConfigParseError
from .jsonc import loads_jsonc

JSONC_CONFIG_FILENAME = ".twistrc"
YAML_CONFIG_FILENAMES = (".twistrc.yaml", ".twistrc.yml")
PYTHON_CONFIG_FILENAME = ".twistrc.py"

_EXPORT_NAMES = ("default", "config")


def _read_jsonc(path: Path) -> Any:
    try:
        return loads_jsonc(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigParseError(path, "o conteúdo não está codificado em UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise ConfigParseError(path, "verifique se o conteúdo é JSON válido") from exc


def _read_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except UnicodeDecodeError as exc:
        raise ConfigParseError(path, "o conteúdo não está codificado em UTF-8") from exc
    except yaml.YAMLError as exc:
        raise ConfigParseError(path, "verifique se o conteúdo é YAML válido") from exc


def _exec_module(path: Path) -> Any:
    # nome único por arquivo para não colidir entre bibliotecas
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:16]
    spec = importlib.util.spec_from_file_location(f"_twistrc_{digest}", path)
    if spec is None or spec.loader is None:
        raise ConfigParseError(path, "não foi possível carregar o módulo")

    module = importlib.util.module_from_spec(spec)

    # carregar a configuração não deve gravar __pycache__ no diretório da biblioteca
    previous = sys.dont_write_bytecode
    sys.dont_write_bytecode = True
    try:
        spec.loader.exec_module(module)
    finally:
        sys.dont_write_bytecode = previous

    for name in _EXPORT_NAMES:
        if hasattr(module, name):
            return getattr(module, name)

    raise ConfigParseError(path, "o módulo deve exportar `default` ou `config`")


def find_config_file(library_path: Path) -> Optional[Path]:
    """Retorna o primeiro arquivo de configuração existente, ou None."""
    for filename in (JSONC_CONFIG_FILENAME, *YAML_CONFIG_FILENAMES, PYTHON_CONFIG_FILENAME):
        candidate = library_path / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_document(library_path: Path, options: Any = None) -> Optional[Dict[str, Any]]:
    """
    Localiza e interpreta o documento de configuração de uma biblioteca.

    Política de leitura:
        - `.twistrc` tem os comentários removidos e é lido como JSON
        - `.twistrc.yaml`/`.twistrc.yml` são lidos com `yaml.safe_load`
        - `.twistrc.py` é executado; o valor exportado em `default` (ou, na
          ausência, em `config`) é chamado com `options` quando for função

    Args:
        library_path (Path): Diretório raiz da biblioteca.
        options (Any): Opções repassadas à configuração dinâmica.

    Returns:
        Optional[Dict[str, Any]]: Documento carregado, ou None se a biblioteca
        não possui arquivo de configuração.

    Raises:
        ConfigParseError: Se o arquivo existir e não puder ser interpretado.
        InvalidDocumentError: Se a raiz do documento não for um mapa.
    """
    config_file = find_config_file(Path(library_path))
    if config_file is None:
        return None

    if config_file.name == JSONC_CONFIG_FILENAME:
        data = _read_jsonc(config_file)
    elif config_file.name in YAML_CONFIG_FILENAMES:
        data = _read_yaml(config_file)
    else:
        exported = _exec_module(config_file)
        data = provider_for(exported).provide({} if options is None else options)

    return ensure_document(data, str(config_file))
