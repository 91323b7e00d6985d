# src/attribute_merge/core/context.py
"""
Contexto de uma execução de validação de atributos.

Este módulo define o `ValidationContext`, a estrutura canônica utilizada
para coletar, durante uma execução, quais fontes foram verificadas, quais
conflitos foram encontrados e os eventos estruturados emitidos pelos
estágios de carregamento, merge e avaliação de Policyfile.

O ValidationContext atua como o único meio permitido de:
    - registro das fontes de atributos vistas na execução
    - registro dos conflitos detectados (caminho e fontes)
    - registro de logs estruturados, opcionalmente associados a uma fonte
    - coleta de warnings não fatais associados a um estágio

Princípios fundamentais:
    - Isolamento por execução (cada validação possui seu próprio contexto)
    - Logs são eventos estruturados, não strings livres
    - Ausência de estado global compartilhado

Invariantes:
    - Logs sempre incluem `run_id` e `stage`
    - Fontes e conflitos preservam a ordem em que foram registrados
    - Nomes de fonte repetidos geram registros distintos
    - Warnings são agrupados por `stage`

Limites explícitos:
    - Não executa validações
    - Não persiste dados automaticamente
    - Não registra eventos no relatório de merge
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List


@dataclass
class ValidationContext:
    """
    Contexto de observabilidade de uma execução de validação.

    Attributes:
        run_id (str): Identificador da execução.
        created_at (datetime): Momento de criação do contexto.
        sources (List[Dict[str, Any]]): Fontes registradas, com detalhes
            de origem (ex.: caminho do arquivo).
        conflicts (List[Dict[str, Any]]): Conflitos detectados, cada um com
            `attribute_path` e `provided_by`.
        events (List[Dict[str, Any]]): Eventos estruturados de log.
        warnings (Dict[str, List[str]]): Warnings agrupados por estágio.

    Limites explícitos:
        - Não decide políticas de falha
        - Não é thread-safe; pertence a uma única execução
    """
    run_id: str
    created_at: datetime
    meta: Dict[str, Any] = field(default_factory=dict)

    sources: List[Dict[str, Any]] = field(default_factory=list, init=False)
    conflicts: List[Dict[str, Any]] = field(default_factory=list, init=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Fontes & conflitos
    # -----------------------------
    def record_source(self, source_name: str, **details: Any) -> None:
        self.sources.append({"source_name": source_name, **details})

    def record_conflict(self, *, attribute_path: str, provided_by: Iterable[str]) -> None:
        self.conflicts.append(
            {"attribute_path": attribute_path, "provided_by": list(provided_by)}
        )

    @property
    def source_names(self) -> List[str]:
        return [s["source_name"] for s in self.sources]

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def events_for_source(self, source_name: str) -> List[Dict[str, Any]]:
        """Eventos associados a uma fonte (campo extra `source_name`), em ordem."""
        return [e for e in self.events if e.get("source_name") == source_name]

    def add_warning(self, *, stage: str, message: str) -> None:
        self.warnings.setdefault(stage, []).append(message)
