# src/attribute_merge/__init__.py
"""
Attribute Merge — verificação de conflitos entre atributos de múltiplas fontes.

Este pacote raiz define o namespace público do Attribute Merge, que valida
se atributos oferecidos por fontes independentes (ex.: cookbooks de um
grafo de dependências) podem ser mesclados em uma única árvore de
configuração sem sobrescritas silenciosas e contraditórias.

Arquitetura em alto nível:
    - core.attributes   → modelo de árvore, checker de merge, loader e hashing
    - core.policyfile   → declarações de Policyfile (run-list e fontes)
    - core.traceability → relatório de merge e Event Log
    - core.context      → logs estruturados e warnings por execução
    - core.errors       → payloads canônicos de erro

Limites explícitos:
    - Não resolve conflitos automaticamente
    - Não mescla listas elemento a elemento
    - Não valida atributos contra schema
"""

from .core.attributes import (
    AttributeMergeChecker,
    ConflictError,
    MergedAttributes,
)

__version__ = "0.1.0"

__all__ = ["AttributeMergeChecker", "ConflictError", "MergedAttributes", "__version__"]
