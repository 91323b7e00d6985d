# src/attribute_merge/core/traceability/__init__.py
"""
Pacote de rastreabilidade do Attribute Merge — Relatório de merge v1.

API pública exposta:
    - MergeReport         → estrutura canônica do relatório
    - create_report       → criação explícita do relatório
    - add_event           → registro explícito de eventos no Event Log
    - record_check_passed → registra verificação sem conflitos (com hash)
    - record_conflict     → registra o conflito que interrompeu a verificação
    - save_report         → persistência em JSON
    - load_report         → restauração determinística

Decisões arquiteturais:
    - Nenhum evento é emitido implicitamente
    - A ordem do Event Log reflete a ordem de chamada
"""

from .report import (
    MergeReport,
    create_report,
    add_event,
    record_check_passed,
    record_conflict,
    save_report,
    load_report,
)

__all__ = [
    "MergeReport",
    "create_report",
    "add_event",
    "record_check_passed",
    "record_conflict",
    "save_report",
    "load_report",
]
