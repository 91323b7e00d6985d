# src/attribute_merge/core/attributes/checker.py
"""
Verificador canônico de conflitos de merge de atributos.

Este módulo implementa a validação que garante que atributos fornecidos
por múltiplas fontes independentes (ex.: cookbooks de um grafo de
dependências) podem ser combinados em uma única árvore sem sobrescritas
silenciosas e contraditórias.

Política de merge (v1):
    - mapping + mapping → merge recursivo por chave
    - escalar + escalar iguais → colapsam em um único valor
    - escalar + escalar diferentes → conflito
    - mapping + escalar → conflito estrutural no próprio caminho
    - chave presente em uma única fonte → atravessa sem alteração
    - listas → escalares opacos (sem merge elemento a elemento)

Política de desempate:
    - As contribuições são mescladas na ordem de registro
    - Dentro de cada contribuição, as chaves seguem a ordem de inserção
    - O primeiro conflito encontrado interrompe a verificação (fail-fast)
    - O conflito é reportado no caminho mais específico onde se manifesta

Invariantes:
    - `check()` nunca muta as contribuições armazenadas
    - `check()` é idempotente: a mesma entrada produz o mesmo resultado
    - Nenhuma árvore parcial é exposta em caso de conflito

Limites explícitos:
    - Não resolve conflitos automaticamente
    - Não valida valores contra schema
    - Não carrega arquivos (ver `loader`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from attribute_merge.core.context import ValidationContext

from .errors import ConflictError, NonCanonicalAttributesError
from .hashing import compute_attributes_hash
from .tree import (
    AttributeNode,
    AttributePath,
    MappingNode,
    ScalarNode,
    copy_scalar,
    scalars_equal,
    to_node,
)


CHECK_STAGE = "attributes.check"


@dataclass(frozen=True)
class Contribution:
    """Atributos oferecidos por uma fonte, armazenados como recebidos."""

    source_name: str
    tree: Any


@dataclass(frozen=True)
class MergedAttributes:
    """
    Resultado de uma verificação bem-sucedida.

    Attributes:
        tree (Dict[str, Any]): Árvore mesclada (cópia independente das entradas).
            Sem contribuições, é um dict vazio.
        provided_by (Dict[Tuple[Any, ...], Tuple[str, ...]]): Chaves do
            caminho → fontes que forneceram valor naquele caminho. A raiz
            usa `()`. As chaves não são renderizadas: `(1,)` e `("1",)`
            são caminhos distintos.
    """

    tree: Any
    provided_by: Dict[Tuple[Any, ...], Tuple[str, ...]]

    def sources_for(self, path: Union[AttributePath, Tuple[Any, ...]]) -> Tuple[str, ...]:
        keys = path.keys if isinstance(path, AttributePath) else tuple(path)
        return self.provided_by.get(keys, ())


# -----------------------------
# Nós de trabalho do merge
# -----------------------------
@dataclass
class _MergedLeaf:
    value: Any
    provided_by: List[str] = field(default_factory=list)


@dataclass
class _MergedBranch:
    children: Dict[Any, "_MergedNode"] = field(default_factory=dict)
    provided_by: List[str] = field(default_factory=list)


_MergedNode = Union[_MergedLeaf, _MergedBranch]


def _seed(source_name: str, node: AttributeNode) -> _MergedNode:
    if isinstance(node, MappingNode):
        return _MergedBranch(
            children={key: _seed(source_name, child) for key, child in node.children},
            provided_by=[source_name],
        )
    return _MergedLeaf(value=node.value, provided_by=[source_name])


def _merge(
    existing: Optional[_MergedNode],
    source_name: str,
    incoming: AttributeNode,
    path: AttributePath,
) -> _MergedNode:
    if existing is None:
        return _seed(source_name, incoming)

    # mapping + mapping -> merge recursivo por chave
    if isinstance(existing, _MergedBranch) and isinstance(incoming, MappingNode):
        existing.provided_by.append(source_name)
        for key, value in incoming.children:
            existing.children[key] = _merge(
                existing.children.get(key), source_name, value, path.child(key)
            )
        return existing

    # escalares iguais -> colapsam
    if (
        isinstance(existing, _MergedLeaf)
        and isinstance(incoming, ScalarNode)
        and scalars_equal(existing.value, incoming.value)
    ):
        existing.provided_by.append(source_name)
        return existing

    raise ConflictError(
        path.render(),
        existing.provided_by + [source_name],
        path=path.keys,
    )


def _materialize(
    node: _MergedNode,
    path: AttributePath,
    provenance: Dict[Tuple[Any, ...], Tuple[str, ...]],
) -> Any:
    provenance[path.keys] = tuple(node.provided_by)
    if isinstance(node, _MergedBranch):
        return {
            key: _materialize(child, path.child(key), provenance)
            for key, child in node.children.items()
        }
    return copy_scalar(node.value)


def _safe_hash(tree: Any) -> Optional[str]:
    try:
        return compute_attributes_hash(tree)
    except (TypeError, NonCanonicalAttributesError):
        return None


class AttributeMergeChecker:
    """
    Acumula contribuições nomeadas de atributos e verifica, em um único
    passo de deep-merge, se elas podem ser combinadas sem conflito.

    Ciclo de vida:
        - Uma instância por execução de validação
        - `add` chamado zero ou mais vezes
        - `check` finaliza; pode ser repetido sem efeitos colaterais
        - Não existe operação de reset

    Limites explícitos:
        - Não é thread-safe para chamadas concorrentes de `add` e `check`

    Example:
        >>> checker = AttributeMergeChecker()
        >>> checker.add("foo", {"a": {"x": 1}})
        >>> checker.add("bar", {"a": {"y": 2}})
        >>> checker.check().tree
        {'a': {'x': 1, 'y': 2}}
    """

    def __init__(self, *, ctx: Optional[ValidationContext] = None) -> None:
        self._contributions: List[Contribution] = []
        self._ctx = ctx

    @property
    def contributions(self) -> Tuple[Contribution, ...]:
        return tuple(self._contributions)

    def add(self, source_name: str, attribute_tree: Any) -> None:
        """Registra uma contribuição; nenhuma validação ocorre aqui."""
        self._contributions.append(
            Contribution(source_name=source_name, tree=attribute_tree)
        )

    with_attributes = add

    def check(self) -> MergedAttributes:
        """
        Mescla todas as contribuições registradas e detecta conflitos.

        Cada chamada re-deriva o resultado a partir da lista de
        contribuições; as entradas nunca são mutadas. Os escalares da
        árvore de saída são cópias profundas quando copiáveis; valores
        sem suporte a cópia (ex.: locks) são repassados por referência.

        O evento de sucesso inclui `attributes_hash` quando a árvore
        possui forma canônica, e `None` caso contrário.

        Returns:
            MergedAttributes: Árvore mesclada e procedência por caminho.

        Raises:
            ConflictError: No primeiro caminho em que fontes discordam.
        """
        self._log(
            "INFO",
            "Verificação de merge de atributos iniciada",
            contributions=len(self._contributions),
        )

        root: Optional[_MergedNode] = None
        try:
            for contribution in self._contributions:
                root = _merge(
                    root,
                    contribution.source_name,
                    to_node(contribution.tree),
                    AttributePath(),
                )
        except ConflictError as exc:
            if self._ctx is not None:
                self._ctx.record_conflict(
                    attribute_path=exc.attribute_path, provided_by=exc.provided_by
                )
            self._log(
                "ERROR",
                str(exc),
                attribute_path=exc.attribute_path,
                provided_by=list(exc.provided_by),
            )
            raise

        provenance: Dict[Tuple[Any, ...], Tuple[str, ...]] = {}
        if root is None:
            root = _MergedBranch()
        tree = _materialize(root, AttributePath(), provenance)

        self._log(
            "INFO",
            "Verificação de merge de atributos concluída sem conflitos",
            paths=len(provenance) - 1,
            attributes_hash=_safe_hash(tree) if self._ctx is not None else None,
        )
        return MergedAttributes(tree=tree, provided_by=provenance)

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self._ctx is not None:
            self._ctx.log(stage=CHECK_STAGE, level=level, message=message, **extra)
