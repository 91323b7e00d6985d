"""
Attribute Merge — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do Attribute Merge.
Erros são considerados artefatos de domínio e fazem parte do contrato
operacional do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida: conflitos nunca são resolvidos
automaticamente.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do Attribute Merge.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica que a validação está bloqueada aguardando
      decisão humana (sem auto-correção, sem fallback silencioso).
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Atributos
ATTRIBUTE_CONFLICT = "ATTRIBUTE_CONFLICT"
ATTRIBUTES_FILE_NOT_FOUND = "ATTRIBUTES_FILE_NOT_FOUND"

# Policyfile
POLICYFILE_INVALID = "POLICYFILE_INVALID"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def attribute_conflict(
    *,
    attribute_path: str,
    provided_by: List[str],
    hint: str = "Alinhe o valor do atributo entre as fontes ou remova-o de todas exceto uma.",
    decision_required: bool = True,
) -> ErrorPayload:
    return ErrorPayload(
        type=ATTRIBUTE_CONFLICT,
        message="Fontes distintas forneceram valores conflitantes para o mesmo atributo",
        details={
            "attribute_path": attribute_path,
            "provided_by": list(provided_by),
        },
        hint=hint,
        decision_required=decision_required,
    )


def attributes_file_not_found(
    *,
    path: str,
    source_name: Optional[str] = None,
    hint: str = "Verifique o caminho informado para o arquivo de atributos da fonte.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ATTRIBUTES_FILE_NOT_FOUND,
        message="Arquivo de atributos não encontrado",
        details={
            "path": path,
            "source_name": source_name,
        },
        hint=hint,
        decision_required=False,
    )


def policyfile_invalid(
    *,
    filename: str,
    errors: List[str],
    hint: str = "Corrija as declarações do policyfile listadas em details.errors.",
) -> ErrorPayload:
    return ErrorPayload(
        type=POLICYFILE_INVALID,
        message="Policyfile contém declarações inválidas",
        details={
            "filename": filename,
            "errors": list(errors),
        },
        hint=hint,
        decision_required=False,
    )
