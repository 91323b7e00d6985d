# src/attribute_merge/core/policyfile/__init__.py
"""
Declarações de Policyfile.

Este pacote modela os metadados que acompanham as contribuições de
atributos: run-list, fonte padrão de cookbooks e overrides de fonte por
cookbook. Problemas de conteúdo são acumulados como mensagens, nunca
levantados.

API pública exposta:
    - PolicyfileDeclarations → declarações acumuladas e erros
    - evaluate_policyfile    → avaliação de um documento YAML
    - load_policyfile        → leitura e avaliação a partir do disco
"""

from .declarations import PolicyfileDeclarations
from .errors import PolicyfileError, PolicyfileNotFoundError
from .loader import evaluate_policyfile, load_policyfile
from .sources import (
    DEFAULT_COMMUNITY_URI,
    ChefServerCookbookSource,
    CommunityCookbookSource,
)

__all__ = [
    "PolicyfileDeclarations",
    "PolicyfileError",
    "PolicyfileNotFoundError",
    "evaluate_policyfile",
    "load_policyfile",
    "DEFAULT_COMMUNITY_URI",
    "ChefServerCookbookSource",
    "CommunityCookbookSource",
]
