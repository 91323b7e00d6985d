# src/attribute_merge/core/attributes/tree.py
"""
Modelo estrutural de árvores de atributos.

Este módulo define a representação canônica dos valores oferecidos por
uma fonte (ex.: um cookbook) e o endereçamento de nós dentro da árvore.

Uma árvore de atributos é um tipo fechado com exatamente duas variantes:
    - `MappingNode` → estrutura chaveada (chave → árvore)
    - `ScalarNode`  → qualquer outro valor, tratado como opaco

Política de classificação (v1):
    - qualquer `collections.abc.Mapping` → MappingNode
    - strings, números, booleanos, None, listas e objetos arbitrários → ScalarNode

Invariantes:
    - A classificação é exaustiva: todo valor cai em exatamente uma variante
    - A ordem dos filhos segue a ordem de inserção do mapping de origem
    - Listas nunca são mescladas elemento a elemento

Limites explícitos:
    - Não valida tipos de folhas
    - Não realiza merge nem detecção de conflitos
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Tuple, Union


class NodeKind(str, Enum):
    SCALAR = "scalar"
    MAPPING = "mapping"


@dataclass(frozen=True)
class ScalarNode:
    """Folha opaca da árvore de atributos."""

    value: Any

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SCALAR


@dataclass(frozen=True)
class MappingNode:
    """Nó chaveado; `children` preserva a ordem de inserção da origem."""

    children: Tuple[Tuple[str, "AttributeNode"], ...] = ()

    @property
    def kind(self) -> NodeKind:
        return NodeKind.MAPPING

    def keys(self) -> Tuple[str, ...]:
        return tuple(k for k, _ in self.children)


AttributeNode = Union[ScalarNode, MappingNode]


def copy_scalar(value: Any) -> Any:
    """
    Copia profundamente um escalar opaco.

    Valores que não suportam cópia (locks, handles, geradores) são
    devolvidos pela própria referência.
    """
    try:
        return deepcopy(value)
    except (TypeError, copy.Error):
        return value


def to_node(value: Any) -> AttributeNode:
    """
    Converte um valor bruto em sua representação estrutural.

    Mappings são convertidos recursivamente; qualquer outro valor é
    encapsulado como `ScalarNode` pela própria referência. A cópia
    ocorre apenas ao materializar a árvore de saída (`to_plain`).

    Args:
        value (Any): Valor bruto oferecido por uma fonte.

    Returns:
        AttributeNode: Árvore estrutural equivalente.
    """
    if isinstance(value, Mapping):
        return MappingNode(
            children=tuple((key, to_node(child)) for key, child in value.items())
        )
    return ScalarNode(value=value)


def to_plain(node: AttributeNode) -> Any:
    """Converte uma árvore estrutural de volta para dicts e valores puros (copiados)."""
    if isinstance(node, MappingNode):
        return {key: to_plain(child) for key, child in node.children}
    return copy_scalar(node.value)


def scalars_equal(left: Any, right: Any) -> bool:
    """
    Compara dois valores escalares sem coerção de tipos.

    Política de igualdade (v1):
        - tipos diferentes → nunca iguais (`1`, `1.0`, `True` e `"1"` diferem)
        - listas/tuplas → comparação elemento a elemento com a mesma regra
        - dicts dentro de listas → mesmas chaves e valores estritamente iguais
        - demais valores → igualdade por valor (`==`)

    Args:
        left (Any): Valor já acumulado.
        right (Any): Valor recebido.

    Returns:
        bool: True se os valores são estruturalmente idênticos.
    """
    if type(left) is not type(right):
        return False

    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            scalars_equal(a, b) for a, b in zip(left, right)
        )

    if isinstance(left, dict):
        return left.keys() == right.keys() and all(
            scalars_equal(left[k], right[k]) for k in left
        )

    return bool(left == right)


@dataclass(frozen=True)
class AttributePath:
    """
    Caminho de um nó dentro da árvore de atributos.

    Renderização canônica: cada chave entre colchetes, concatenadas
    (`("a", "b")` → `[a][b]`). O caminho vazio (raiz) é renderizado
    como string vazia.
    """

    keys: Tuple[str, ...] = ()

    @classmethod
    def of(cls, keys: Iterable[Any]) -> "AttributePath":
        return cls(keys=tuple(keys))

    def child(self, key: Any) -> "AttributePath":
        return AttributePath(keys=self.keys + (key,))

    def render(self) -> str:
        return "".join(f"[{key}]" for key in self.keys)

    def __str__(self) -> str:
        return self.render()
