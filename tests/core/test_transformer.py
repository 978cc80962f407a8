# tests/core/test_transformer.py
"""
Testes da construção da configuração do transformador.

Invariantes:
    - A função é pura: mesma entrada, mesma saída, input não mutado
    - Opções do Twist controlam a presença de plugins e presets
"""

import copy

from twist_configuration import TwistConfiguration
from twist_configuration.core.transformer import TWIST_TRANSFORM_PLUGIN, build_transformer_options


def _plugin_names(options):
    return [plugin[0] if isinstance(plugin, list) else plugin for plugin in options["plugins"]]


def test_default_configuration():
    resolved = TwistConfiguration("node", {"root": None}).resolved_options
    options = build_transformer_options(resolved)
    names = _plugin_names(options)

    assert options["babelrc"] is False
    assert names[0] == TWIST_TRANSFORM_PLUGIN
    assert "babel-plugin-module-resolver" in names
    assert "fast-async" in names
    assert "babel-plugin-transform-regenerator" not in names
    assert "babel-plugin-transform-runtime" not in names
    assert options["presets"] == [
        ["babel-preset-env", {"targets": {"node": "current"}, "modules": "commonjs"}]
    ]


def test_runtime_and_regenerator():
    resolved = TwistConfiguration(
        "node",
        {"root": None, "includeBabelRuntime": True, "regenerator": True, "targets": {"browsers": "IE 9"}},
    ).resolved_options
    options = build_transformer_options(resolved)
    names = _plugin_names(options)

    assert "babel-plugin-transform-regenerator" in names
    assert "fast-async" not in names
    runtime = options["plugins"][names.index("babel-plugin-transform-runtime")]
    assert runtime[1] == {"polyfill": True, "regenerator": True}
    assert options["presets"][0][1]["targets"] == {"browsers": "IE 9"}


def test_disabled_module_features():
    resolved = TwistConfiguration(
        "node", {"root": None, "transformImports": False, "useBabelModuleResolver": False}
    ).resolved_options
    options = build_transformer_options(resolved)

    assert "babel-plugin-module-resolver" not in _plugin_names(options)
    assert options["presets"][0][1]["modules"] is False


def test_auto_import_and_source_lines_reach_twist_plugin():
    config = TwistConfiguration("node", {"root": None, "jsxSourceLines": True})
    config.merge_config({"components": {"ui:button": {"module": "@ui/kit", "export": "Button"}}})
    twist_plugin = config.transformer_options["plugins"][0]

    assert twist_plugin[1]["jsxSourceLines"] is True
    assert twist_plugin[1]["autoImport"] == {"ui:button": {"module": "@ui/kit", "export": "Button"}}


def test_builder_is_pure():
    resolved = TwistConfiguration("node", {"root": None}).resolved_options
    snapshot = copy.deepcopy(resolved)

    assert build_transformer_options(resolved) == build_transformer_options(resolved)
    assert resolved == snapshot
