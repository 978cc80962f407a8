# src/twist_configuration/core/__init__.py
"""
Core da configuração Twist.

Componentes principais:
    - library        → resolução de nomes, manifest, registry e carregamento recursivo
    - config         → schema fechado de opções, documentos `.twistrc` e exceções
    - configuration  → agregação de decorators, components, plugins e opções
    - transformer    → tradução das opções resolvidas para o transformador

Princípios fundamentais:
    - Execução síncrona e determinística, sem estado global
    - Erros estruturais são fatais e tipados
    - A biblioteca ativa é passada explicitamente durante a recursão
"""
