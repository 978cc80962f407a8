# tests/conftest.py
"""
Fixtures compartilhados para testes da Twist Configuration.

Este módulo define fixtures reutilizáveis que constroem bibliotecas Twist
reais em diretórios temporários (`tmp_path`):
- manifest `package.json` com nome e versão
- arquivos `.twistrc` (JSON com comentários), `.twistrc.yaml` e `.twistrc.py`
- uma árvore de quatro bibliotecas de referência que exercita sub-bibliotecas,
  configuração dinâmica, overrides e contextos

Decisões arquiteturais:
    - Bibliotecas são criadas no filesystem, pois a resolução lê o disco
    - Cada teste recebe uma árvore isolada (tmp_path)
    - Um merge target de gravação substitui o merger nos testes do loader

Invariantes:
    - Nenhuma fixture depende do cwd real do processo
    - Nenhuma fixture carrega bibliotecas por conta própria

Limites explícitos:
    - Não substituir testes de integração do merger
    - Não conter lógica condicional complexa
"""

import json
import textwrap
from pathlib import Path

import pytest


def _write(path: Path, text: str) -> None:
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")


@pytest.fixture
def make_library(tmp_path):
    """
    Fixture factory que cria uma biblioteca Twist em `tmp_path`.

    Args (da função retornada):
        dirname: Diretório relativo a `base` (ou a `tmp_path`).
        name / version: Campos do manifest.
        twistrc: Documento serializado como `.twistrc` (JSON).
        twistrc_text / twistrc_yaml / twistrc_py: Conteúdo bruto de cada formato.

    Returns:
        Callable[..., Path]: Função que devolve o diretório criado.
    """

    def _make(
        dirname,
        name,
        version="1.0.0",
        *,
        twistrc=None,
        twistrc_text=None,
        twistrc_yaml=None,
        twistrc_py=None,
        base=None,
    ):
        library_dir = Path(base or tmp_path) / dirname
        library_dir.mkdir(parents=True, exist_ok=True)
        (library_dir / "package.json").write_text(
            json.dumps({"name": name, "version": version}), encoding="utf-8"
        )
        if twistrc is not None:
            (library_dir / ".twistrc").write_text(json.dumps(twistrc, indent=2), encoding="utf-8")
        if twistrc_text is not None:
            _write(library_dir / ".twistrc", twistrc_text)
        if twistrc_yaml is not None:
            _write(library_dir / ".twistrc.yaml", twistrc_yaml)
        if twistrc_py is not None:
            _write(library_dir / ".twistrc.py", twistrc_py)
        return library_dir

    return _make


@pytest.fixture
def twist_libraries(make_library):
    """
    Árvore de referência com quatro bibliotecas irmãs.

    - testLibrary1: `.twistrc` com decorator `Store` e component `my:component`
    - testLibrary2: `.twistrc.py` cujo component recebe o nome via opções
    - testLibrary3: defaults implícitos, plugins, opções e override de contexto
    - testLibrary4: `.twistrc.py` que carrega as três anteriores e sobrescreve
      `my:component`

    Returns:
        dict: nome curto → diretório da biblioteca.
    """
    library1 = make_library(
        "testLibrary1",
        "test-library1",
        twistrc_text="""
        {
            // decorators e components exportados por @twist/core
            "decorators": [
                [ "Store", {
                    "module": "@twist/core",
                    "export": "Store",
                    "inherits": { "module": "@twist/core", "export": "BaseStore" }
                } ]
            ],
            "components": [
                [ "my:component", { "module": "@twist/core", "export": "MyComponent" } ]
            ]
        }
        """,
    )

    library2 = make_library(
        "testLibrary2",
        "test-library2",
        twistrc_py="""
        def default(options):
            return {
                "decorators": [
                    ["Store", {
                        "module": "@twist/core",
                        "export": "Store",
                        "inherits": {"module": "@twist/core", "export": "BaseStore"},
                    }],
                ],
                "components": [
                    [options.get("componentName", "default:component"), {
                        "module": "@twist/core",
                        "export": "MyComponent",
                    }],
                ],
            }
        """,
    )

    library3 = make_library(
        "testLibrary3",
        "test-library3",
        twistrc_text="""
        {
            "decorators": {
                "Decorator1": {},
                "Decorator2": { "module": "@twist/test" },
                "Decorator3": { "module": "@twist/test", "export": "Dec" },
                "Decorator4": { "inherits": "BaseClass" },
                "Decorator5": { "inherits": { "module": "@twist/test", "export": "BaseClass" } }
            },
            /* plugins: forma simples e par [plugin, opções] */
            "babelPlugins": [ "plugin1", [ "plugin2", { "option": true } ] ],
            "options": { "polyfill": 42 },
            "context": {
                "webpack": {
                    "options": { "polyfill": 1024, "regenerator": "hello" }
                }
            }
        }
        """,
    )

    library4 = make_library(
        "testLibrary4",
        "test-library4",
        twistrc_py="""
        import os

        HERE = os.path.dirname(__file__)

        config = {
            "libraries": [
                os.path.join(HERE, "..", "testLibrary1"),
                [os.path.join(HERE, "..", "testLibrary2"), {"componentName": "another:component"}],
                "../testLibrary3",
            ],
            "components": [
                ["my:component", {"module": "my-module", "export": "OverriddenComponent"}],
            ],
        }
        """,
    )

    return {
        "library1": library1,
        "library2": library2,
        "library3": library3,
        "library4": library4,
    }


class RecordingTarget:
    """Merge target que apenas registra os documentos recebidos."""

    def __init__(self):
        self.calls = []

    def merge_config(self, document=None, *, library=None):
        self.calls.append((document, library))
        return self


@pytest.fixture
def recording_target():
    return RecordingTarget()
