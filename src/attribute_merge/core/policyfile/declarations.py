# src/attribute_merge/core/policyfile/declarations.py
"""
Modelo declarativo de um Policyfile.

Este módulo define `PolicyfileDeclarations`, a estrutura que acumula as
declarações de um Policyfile (run-list, fonte padrão de cookbooks e
overrides de fonte por cookbook) junto com os erros encontrados.

Política de erros (v1):
    - Problemas de conteúdo nunca levantam exceção
    - Cada problema é registrado como mensagem legível em `errors`
    - A ordem de `errors` reflete a ordem das declarações

Invariantes:
    - Um cookbook tem no máximo uma fonte de override
    - Reatribuir a mesma fonte a um cookbook é redundante, não erro
    - Reatribuir uma fonte diferente é erro de fontes conflitantes

Limites explícitos:
    - Não avalia scripts nem DSLs de configuração
    - Não resolve nem baixa cookbooks
    - Não verifica atributos (ver `core.attributes`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from attribute_merge.core.context import ValidationContext
from attribute_merge.core.errors import ErrorPayload, policyfile_invalid

from .sources import (
    CHEF_SERVER,
    COMMUNITY,
    DEFAULT_COMMUNITY_URI,
    ChefServerCookbookSource,
    CommunityCookbookSource,
)


DECLARATIONS_STAGE = "policyfile.declarations"

CookbookSource = Union[CommunityCookbookSource, ChefServerCookbookSource]


def _format_source(options: Dict[str, Any]) -> str:
    return "{" + ", ".join(f"{k}: {v!r}" for k, v in options.items()) + "}"


@dataclass
class PolicyfileDeclarations:
    """
    Declarações acumuladas de um Policyfile e erros associados.

    Attributes:
        filename (str): Nome do policyfile (usado em mensagens).
        run_list (List[str]): Itens da run-list, na ordem declarada.
        default_source (Optional[CookbookSource]): Fonte padrão, se declarada.
        cookbook_source_overrides (Dict[str, Dict[str, Any]]): Cookbook → opções de fonte.
        errors (List[str]): Mensagens de erro legíveis.
    """

    filename: str = "Policyfile.yaml"
    ctx: Optional[ValidationContext] = field(default=None, repr=False, compare=False)

    run_list: List[str] = field(default_factory=list)
    default_source: Optional[CookbookSource] = None
    cookbook_source_overrides: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def set_run_list(self, *items: str) -> None:
        self.run_list = list(items)

    def set_default_source(self, source_type: str, uri: Optional[str] = None) -> None:
        """
        Define a fonte padrão de cookbooks.

        Regras (v1):
            - community: URI opcional (padrão: API da comunidade)
            - chef_server: URI obrigatória
            - qualquer outro tipo: erro de tipo inválido
        """
        if source_type == COMMUNITY:
            self.default_source = CommunityCookbookSource(uri or DEFAULT_COMMUNITY_URI)
        elif source_type == CHEF_SERVER:
            if not uri:
                self.errors.append(
                    "É necessário informar a URI do servidor ao usar default_source chef_server"
                )
                return
            self.default_source = ChefServerCookbookSource(uri)
        else:
            self.errors.append(f"Tipo de default_source inválido: '{source_type}'")

    def add_cookbook(self, name: str, source_options: Optional[Mapping[str, Any]] = None) -> None:
        """
        Associa um cookbook a uma fonte específica (ex.: `path`, `git`, `chef_server`).

        As opções são recebidas como mapping, sem restrição sobre os nomes
        das chaves.

        Uma segunda associação com opções idênticas gera apenas warning;
        com opções diferentes, registra erro e mantém a fonte anterior.
        """
        source_options = dict(source_options or {})
        previous = self.cookbook_source_overrides.get(name)

        if previous is None:
            self.cookbook_source_overrides[name] = source_options
            return

        if previous == source_options:
            if self.ctx is not None:
                self.ctx.add_warning(
                    stage=DECLARATIONS_STAGE,
                    message=f"Cookbook '{name}' declarado mais de uma vez com a mesma fonte",
                )
            return

        self.errors.append(
            f"Cookbook '{name}' atribuído a fontes conflitantes\n"
            "\n"
            f"Fonte anterior: {_format_source(previous)}\n"
            f"Conflita com: {_format_source(source_options)}\n"
        )

    def validate(self, *, check_run_list: bool = True) -> bool:
        """
        Aplica as validações finais e retorna `valid`.

        `check_run_list=False` omite a exigência de run-list não vazia,
        usada quando a run-list declarada já foi rejeitada por tipo.
        """
        if check_run_list and not self.run_list:
            self.errors.append("run_list inválido: run_list não pode ser vazio")
        return self.valid

    def to_payload(self) -> ErrorPayload:
        return policyfile_invalid(filename=self.filename, errors=self.errors)
