# src/attribute_merge/core/attributes/__init__.py
"""
Camada de atributos do Attribute Merge.

Este pacote contém as estruturas e utilitários responsáveis por
representar, carregar, mesclar e identificar árvores de atributos
oferecidas por fontes nomeadas.

Responsabilidades do pacote:
    - Modelo fechado de árvore (escalar | mapping) e caminhos renderizados
    - Deep-merge com detecção do primeiro conflito (fail-fast)
    - Carregamento de arquivos de atributos (YAML/JSON)
    - Hash canônico da árvore mesclada

Invariantes:
    - Valores iguais nunca conflitam
    - Conflitos são reportados no caminho mais específico
    - Mapping contra escalar é conflito estrutural

Limites explícitos:
    - Não resolve conflitos
    - Não valida semântica de valores
"""

from .checker import AttributeMergeChecker, Contribution, MergedAttributes
from .errors import (
    AttributeMergeError,
    AttributesFileNotFoundError,
    ConflictError,
    InvalidAttributesRootTypeError,
    NonCanonicalAttributesError,
    UnsupportedAttributesFormatError,
)
from .hashing import compute_attributes_hash
from .loader import check_attribute_files, load_attributes_file, load_contributions
from .tree import AttributePath, MappingNode, NodeKind, ScalarNode, to_node, to_plain

__all__ = [
    "AttributeMergeChecker",
    "Contribution",
    "MergedAttributes",
    "AttributeMergeError",
    "AttributesFileNotFoundError",
    "ConflictError",
    "InvalidAttributesRootTypeError",
    "NonCanonicalAttributesError",
    "UnsupportedAttributesFormatError",
    "compute_attributes_hash",
    "check_attribute_files",
    "load_attributes_file",
    "load_contributions",
    "AttributePath",
    "MappingNode",
    "NodeKind",
    "ScalarNode",
    "to_node",
    "to_plain",
]
