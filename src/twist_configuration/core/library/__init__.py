# src/twist_configuration/core/library/__init__.py
"""Resolução, identidade e carregamento de bibliotecas Twist."""
