# src/attribute_merge/core/attributes/loader.py
"""
Loader canônico de arquivos de atributos.

Este módulo é responsável por carregar atributos oferecidos por fontes
nomeadas a partir de arquivos YAML ou JSON e submetê-los, na ordem
informada, ao `AttributeMergeChecker`.

Responsabilidades do módulo:
    - Carregar arquivos de atributos em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Converter pares (fonte, caminho) em contribuições ordenadas
    - Executar a verificação de merge sobre os arquivos carregados

Princípios fundamentais:
    - Nenhuma heurística implícita é aplicada
    - Erros estruturais de arquivo são falhas fatais
    - A ordem das fontes é preservada (define o desempate de conflitos)

Limites explícitos:
    - Não valida semântica dos valores
    - Não resolve conflitos
    - Não persiste resultado ou hash
"""

from collections import abc
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
import json

import yaml  # PyYAML

from attribute_merge.core.context import ValidationContext

from .checker import AttributeMergeChecker, Contribution, MergedAttributes
from .errors import (
    AttributesFileNotFoundError,
    InvalidAttributesRootTypeError,
    UnsupportedAttributesFormatError,
)


LOAD_STAGE = "attributes.load"

PathLike = Union[str, Path]
SourceSpec = Union[Mapping[str, PathLike], Sequence[Tuple[str, PathLike]]]


def load_attributes_file(path: PathLike, *, source_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Carrega um arquivo de atributos e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios

    Args:
        path (PathLike): Caminho para o arquivo de atributos.
        source_name (Optional[str]): Fonte dona do arquivo (apenas diagnóstico).

    Returns:
        Dict[str, Any]: Atributos carregados.

    Raises:
        AttributesFileNotFoundError: Se o arquivo não existir.
        UnsupportedAttributesFormatError: Se o formato não for suportado.
        InvalidAttributesRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)

    if not path.exists():
        raise AttributesFileNotFoundError(
            f"Arquivo de atributos não encontrado: {path}",
            path=str(path),
            source_name=source_name,
        )

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedAttributesFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidAttributesRootTypeError(
            f"Raiz dos atributos deve ser dict, recebido: {type(data).__name__} ({path})"
        )

    return data


def _iter_sources(sources: SourceSpec) -> List[Tuple[str, PathLike]]:
    if isinstance(sources, abc.Mapping):
        return list(sources.items())
    return [(name, path) for name, path in sources]


def load_contributions(
    sources: SourceSpec,
    *,
    ctx: Optional[ValidationContext] = None,
) -> List[Contribution]:
    """
    Carrega os arquivos de cada fonte, preservando a ordem informada.

    Aceita um mapping `{fonte: caminho}` ou uma sequência de pares
    `(fonte, caminho)`; a sequência permite repetir o nome de uma fonte.
    """
    contributions: List[Contribution] = []
    for source_name, path in _iter_sources(sources):
        tree = load_attributes_file(path, source_name=source_name)
        if ctx is not None:
            ctx.record_source(source_name, path=str(path))
            ctx.log(
                stage=LOAD_STAGE,
                level="DEBUG",
                message="Atributos carregados",
                source_name=source_name,
                path=str(path),
                top_level_keys=len(tree),
            )
        contributions.append(Contribution(source_name=source_name, tree=tree))
    return contributions


def check_attribute_files(
    sources: SourceSpec,
    *,
    ctx: Optional[ValidationContext] = None,
) -> MergedAttributes:
    """
    Carrega os arquivos de atributos das fontes e verifica o merge.

    Um novo `AttributeMergeChecker` é criado por chamada; as fontes são
    registradas na ordem informada.

    Args:
        sources (SourceSpec): Fontes e caminhos de seus arquivos de atributos.
        ctx (Optional[ValidationContext]): Contexto para logs estruturados.

    Returns:
        MergedAttributes: Resultado do merge sem conflitos.

    Raises:
        AttributesFileNotFoundError: Se algum arquivo não existir.
        UnsupportedAttributesFormatError: Se algum formato não for suportado.
        InvalidAttributesRootTypeError: Se algum arquivo não contiver um dict.
        ConflictError: Se duas fontes discordarem sobre um atributo.
    """
    checker = AttributeMergeChecker(ctx=ctx)
    for contribution in load_contributions(sources, ctx=ctx):
        checker.add(contribution.source_name, contribution.tree)
    return checker.check()
