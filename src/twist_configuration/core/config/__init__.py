# src/twist_configuration/core/config/__init__.py
"""
Camada de configuração da Twist Configuration.

Este pacote contém o schema fechado de opções, a leitura dos arquivos
`.twistrc` de cada biblioteca, a normalização de documentos e a
hierarquia de exceções.

Invariantes:
    - O schema de opções não é extensível por documentos
    - Documentos são normalizados antes de qualquer merge
    - Conflitos e conteúdos inválidos são tratados como erro

Limites explícitos:
    - Não resolve bibliotecas
    - Não acumula estado entre documentos
"""
