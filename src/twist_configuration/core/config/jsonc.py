# src/twist_configuration/core/config/jsonc.py
"""
Leitura de JSON com comentários (formato do arquivo `.twistrc`).

Comentários `// ...` e `/* ... */` são substituídos por espaços antes do
parse, preservando quebras de linha para que posições reportadas pelo
`json` continuem apontando para a linha original. Conteúdo dentro de
strings nunca é alterado.
"""

from __future__ import annotations

import json
from typing import Any


def _blank(text: str) -> str:
    return "".join(ch if ch in "\r\n" else " " for ch in text)


def strip_json_comments(text: str) -> str:
    out = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        if text.startswith("//", i):
            end = i + 2
            while end < n and text[end] not in "\r\n":
                end += 1
            out.append(_blank(text[i:end]))
            i = end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            # comentário não terminado consome o restante do texto
            end = n if end == -1 else end + 2
            out.append(_blank(text[i:end]))
            i = end
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def loads_jsonc(text: str) -> Any:
    """
    Faz o parse de um texto JSON com comentários.

    Raises:
        json.JSONDecodeError: Se o conteúdo, sem comentários, não for JSON válido.
    """
    return json.loads(strip_json_comments(text))
