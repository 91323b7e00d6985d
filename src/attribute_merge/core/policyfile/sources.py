# src/attribute_merge/core/policyfile/sources.py
"""
Fontes de cookbooks declaráveis em um Policyfile.

Uma fonte padrão (`default_source`) indica de onde cookbooks sem
override explícito devem ser resolvidos.

Tipos suportados (v1):
    - community   → API de cookbooks da comunidade (URI opcional)
    - chef_server → servidor Chef (URI obrigatória)

Invariantes:
    - Fontes são imutáveis e comparadas por valor
"""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_COMMUNITY_URI = "https://api.berkshelf.com"

COMMUNITY = "community"
CHEF_SERVER = "chef_server"


@dataclass(frozen=True)
class CommunityCookbookSource:
    uri: str = DEFAULT_COMMUNITY_URI

    @property
    def source_type(self) -> str:
        return COMMUNITY


@dataclass(frozen=True)
class ChefServerCookbookSource:
    uri: str

    @property
    def source_type(self) -> str:
        return CHEF_SERVER
