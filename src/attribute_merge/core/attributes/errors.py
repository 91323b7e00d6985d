# src/attribute_merge/core/attributes/errors.py
"""
Exceções canônicas da camada de atributos do Attribute Merge.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento de arquivos de atributos e a verificação de conflitos
entre fontes.

As exceções aqui definidas representam **falhas de validação de domínio**
(ex.: duas fontes discordando sobre o mesmo atributo) ou falhas
estruturais de entrada, e não erros genéricos de execução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Conflitos são recuperáveis pelo chamador (ele decide interromper ou não)
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções da camada herdam de `AttributeMergeError`
    - `ConflictError` sempre carrega caminho e fontes envolvidas

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não resolve conflitos automaticamente
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from attribute_merge.core.errors import (
    ErrorPayload,
    attribute_conflict,
    attributes_file_not_found,
)


class AttributeMergeError(Exception):
    """
    Exceção base para erros da camada de atributos.

    Permite captura genérica de qualquer falha levantada durante
    carregamento de atributos ou verificação de merge.
    """


class ConflictError(AttributeMergeError):
    """
    Exceção levantada quando duas ou mais fontes fornecem valores
    diferentes para o mesmo caminho de atributo.

    Também cobre o conflito estrutural: uma fonte fornece um mapping e
    outra fornece um escalar no mesmo caminho.

    Exemplo de conflito:
        - foo: {"a": {"b": "c"}}
        - bar: {"a": {"b": "d"}}
        → attribute_path == "[a][b]", provided_by == ["foo", "bar"]

    Invariantes:
        - `attribute_path` é o caminho mais específico onde a divergência ocorre
        - `provided_by` contém ao menos duas fontes, na ordem de contribuição
        - Fontes repetidas são preservadas (não há deduplicação)

    Attributes:
        attribute_path (str): Caminho renderizado (`[a][b]`).
        provided_by (List[str]): Fontes que forneceram valor neste caminho.
        path (Tuple[Any, ...]): Chaves do caminho, sem renderização.
    """

    def __init__(
        self,
        attribute_path: str,
        provided_by: Iterable[str],
        *,
        path: Tuple[Any, ...] = (),
    ) -> None:
        self.attribute_path = attribute_path
        self.provided_by: List[str] = list(provided_by)
        self.path = tuple(path)
        super().__init__(
            f"Atributo '{attribute_path}' recebeu valores conflitantes das fontes: "
            f"{', '.join(str(s) for s in self.provided_by)}"
        )

    def to_payload(self) -> ErrorPayload:
        return attribute_conflict(
            attribute_path=self.attribute_path,
            provided_by=self.provided_by,
        )


class AttributesFileNotFoundError(AttributeMergeError):
    """
    Exceção levantada quando o arquivo de atributos de uma fonte
    não existe no caminho informado.
    """

    def __init__(self, message: str, *, path: str, source_name: Optional[str] = None) -> None:
        self.path = path
        self.source_name = source_name
        super().__init__(message)

    def to_payload(self) -> ErrorPayload:
        return attributes_file_not_found(path=self.path, source_name=self.source_name)


class UnsupportedAttributesFormatError(AttributeMergeError):
    """
    Exceção levantada quando o formato do arquivo de atributos
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidAttributesRootTypeError(AttributeMergeError):
    """
    Exceção levantada quando o conteúdo raiz de um arquivo de atributos
    não é um dicionário (`dict`).

    Decisões arquiteturais:
        - Contribuições de atributos são sempre mapas chave-valor
        - Listas ou valores escalares no root são rejeitados no carregamento

    Limites explícitos:
        - Não se aplica a contribuições passadas diretamente ao checker,
          que as aceita como dadas
    """


class NonCanonicalAttributesError(AttributeMergeError):
    """
    Exceção levantada quando uma árvore de atributos não pode ser reduzida
    à forma JSON canônica usada no hashing.

    Casos cobertos (v1):
        - Chaves de mapping que não são strings
        - Tuplas, conjuntos e objetos arbitrários como valores
        - Floats não finitos (NaN, infinito)

    Attributes:
        attribute_path (str): Caminho renderizado do primeiro valor rejeitado.
    """

    def __init__(self, message: str, *, attribute_path: str) -> None:
        self.attribute_path = attribute_path
        super().__init__(message)
