# src/attribute_merge/core/__init__.py
"""
Core do Attribute Merge.

Este pacote contém a implementação canônica da verificação de merge de
atributos e das estruturas de suporte (contexto, erros, rastreabilidade).

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de I/O, exceto nos loaders explícitos

Componentes principais:
    - attributes   → checker de conflitos, modelo de árvore, loader e hashing
    - policyfile   → declarações de run-list e fontes de cookbooks
    - traceability → relatório de merge e Event Log
"""
