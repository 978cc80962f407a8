# src/twist_configuration/core/transformer.py
"""
Construção da configuração do transformador de código (Babel).

Converte as opções resolvidas do Twist (`TwistConfiguration.resolved_options`)
na configuração consumida pelo transformador downstream. A função é pura:
a mesma entrada sempre produz a mesma saída, sem mutar o input.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List

TWIST_TRANSFORM_PLUGIN = "@twist/babel-plugin-transform"

SYNTAX_PLUGINS = (
    "babel-plugin-syntax-jsx",
    "babel-plugin-syntax-flow",
    "babel-plugin-syntax-decorators",
    "babel-plugin-syntax-trailing-function-commas",
)

LANGUAGE_PLUGINS = (
    "babel-plugin-transform-decorators-legacy",
    "babel-plugin-transform-class-properties",
    "babel-plugin-transform-object-rest-spread",
    "babel-plugin-transform-flow-strip-types",
)


def build_transformer_options(options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Monta presets e plugins do transformador a partir das opções resolvidas.

    Ordem dos plugins:
        - plugin de transformação do Twist (autoImport, jsxSourceLines)
        - plugins de sintaxe e de linguagem
        - module-resolver com os aliases (se `useBabelModuleResolver`)
        - regenerator ou fast-async para funções assíncronas
        - transform-runtime (se `includeBabelRuntime`)
        - plugins acumulados das bibliotecas, na ordem de registro

    Args:
        options (Dict[str, Any]): Saída de `resolved_options`.

    Returns:
        Dict[str, Any]: Configuração do transformador.
    """
    plugins: List[Any] = [
        [
            TWIST_TRANSFORM_PLUGIN,
            {
                "autoImport": deepcopy(options.get("autoImport", {})),
                "jsxSourceLines": options["jsxSourceLines"],
            },
        ],
        *SYNTAX_PLUGINS,
        *LANGUAGE_PLUGINS,
    ]

    if options["useBabelModuleResolver"]:
        plugins.append(["babel-plugin-module-resolver", {"alias": dict(options.get("aliases", {}))}])

    if options["regenerator"]:
        plugins.append("babel-plugin-transform-regenerator")
    else:
        plugins.append(["fast-async", {"spec": True}])

    if options["includeBabelRuntime"]:
        plugins.append(
            [
                "babel-plugin-transform-runtime",
                {"polyfill": options["polyfill"], "regenerator": options["regenerator"]},
            ]
        )

    for plugin, plugin_options in options.get("plugins", []):
        plugins.append([plugin, plugin_options])

    presets = [
        [
            "babel-preset-env",
            {
                "targets": deepcopy(options["targets"]),
                "modules": "commonjs" if options["transformImports"] else False,
            },
        ]
    ]

    return {"babelrc": False, "presets": presets, "plugins": plugins}
