# src/twist_configuration/core/library/resolver.py
"""
Resolução de bibliotecas Twist para diretórios no disco.

Uma biblioteca é identificada por um nome de pacote (`nome` ou
`@escopo/nome`) ou por um caminho. Em ambos os casos, o resultado da
resolução é o diretório absoluto que contém o manifest `package.json`.

Política de resolução:
    - Caminhos absolutos e relativos explícitos (`./x`, `../x`) apontam
      diretamente para o diretório da biblioteca
    - Nomes são procurados em `node_modules/<nome>` a partir do diretório
      base, subindo pelos diretórios ancestrais (mais próximo primeiro)

Invariantes:
    - O caminho retornado é absoluto e normalizado
    - O diretório retornado sempre contém o manifest
    - Nenhum efeito colateral além de leituras no filesystem

Limites explícitos:
    - Não instala bibliotecas
    - Não interpreta o campo `main` nem `exports` do manifest
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from ..config.errors import ManifestParseError, ResolutionError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"
MODULES_DIRNAME = "node_modules"

LibraryRef = Union[str, "os.PathLike[str]"]


def _normalize(path: Path) -> Path:
    return Path(os.path.normpath(os.path.abspath(path)))


def _is_path_reference(library: str) -> bool:
    return (
        os.path.isabs(library)
        or library in (".", "..")
        or library.startswith(("./", "../", ".\\", "..\\"))
    )


def _has_manifest(directory: Path) -> bool:
    return (directory / MANIFEST_FILENAME).is_file()


def resolve_root(library: LibraryRef, *, base_dir: Optional[Path] = None) -> Path:
    """
    Resolve uma biblioteca para o diretório absoluto do seu manifest.

    Args:
        library: Nome do pacote ou caminho do diretório da biblioteca.
        base_dir: Diretório de onde a resolução parte. Default: cwd.

    Returns:
        Path: Diretório absoluto e normalizado contendo `package.json`.

    Raises:
        ResolutionError: Se nenhuma biblioteca correspondente for encontrada.
    """
    base = _normalize(Path(base_dir) if base_dir is not None else Path.cwd())
    reference = os.fspath(library)

    if _is_path_reference(reference):
        candidates = [_normalize(base / reference)]
    else:
        candidates = [
            _normalize(directory / MODULES_DIRNAME / reference)
            for directory in (base, *base.parents)
        ]

    for candidate in candidates:
        if _has_manifest(candidate):
            logger.debug("Biblioteca %s resolvida para %s", reference, candidate)
            return candidate

    raise ResolutionError(reference, base)


def read_manifest(library_path: Path) -> Tuple[Optional[str], Optional[str]]:
    """
    Lê nome e versão do manifest de uma biblioteca resolvida.

    Raises:
        ManifestParseError: Se o manifest não existir, não for JSON válido
            ou não tiver um objeto como raiz.
    """
    manifest = Path(library_path) / MANIFEST_FILENAME

    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestParseError(manifest, "arquivo não encontrado") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(manifest, "conteúdo não é JSON válido") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(manifest, f"raiz deve ser objeto, recebido: {type(data).__name__}")

    return data.get("name"), data.get("version")
