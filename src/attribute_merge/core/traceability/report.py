# src/attribute_merge/core/traceability/report.py
"""
Relatório de merge v1 — registro forense de uma validação de atributos.

Este módulo define a estrutura canônica do relatório de merge, que
consolida as fontes verificadas, o resultado da verificação (sucesso ou
conflito) e um Event Log ordenado de eventos explícitos.

O relatório é projetado para ser:
    - determinístico
    - serializável em JSON
    - reconstruível via round-trip

Decisões arquiteturais:
    - Nenhum evento é emitido implicitamente
    - Atualizações ocorrem apenas via chamadas explícitas da API
    - Timestamps são normalizados para UTC

Limites explícitos:
    - Não executa a verificação de merge
    - Não resolve conflitos
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from attribute_merge.core.attributes.checker import MergedAttributes
from attribute_merge.core.attributes.errors import ConflictError
from attribute_merge.core.attributes.hashing import compute_attributes_hash


REPORT_VERSION = "1"

STATUS_PENDING = "pending"
STATUS_PASSED = "passed"
STATUS_CONFLICT = "conflict"


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """
    Normaliza um timestamp para timezone-aware em UTC.

    Timestamps timezone-naive são assumidos como UTC; os demais são
    convertidos para UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


@dataclass
class MergeReport:
    """
    Relatório v1 de uma verificação de merge de atributos.

    Campos principais:
        - run: metadados da execução (run_id, started_at, report_version)
        - inputs: fontes verificadas, na ordem de contribuição
        - result: status e detalhes do resultado (hash ou conflito)
        - events: Event Log ordenado

    Invariantes:
        - `events` é sempre uma lista ordenada
        - A estrutura completa é serializável
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    result: Dict[str, Any] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": {k: (list(v) if isinstance(v, list) else v) for k, v in self.inputs.items()},
            "result": dict(self.result),
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MergeReport":
        """
        Reconstrói um relatório a partir de sua representação em dicionário.

        A reconstrução é permissiva: campos ausentes são inicializados
        com valores vazios e não há validação de schema.
        """
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            result=dict(data.get("result", {}) or {}),
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_report(
    *,
    run_id: str,
    started_at: datetime,
    sources: Sequence[str],
) -> MergeReport:
    """
    Cria o relatório inicial de uma verificação de merge.

    ⚠️ Importante: esta função **não emite eventos implicitamente**.
    O Event Log inicia vazio e o resultado inicia como `pending`.

    Args:
        run_id (str): Identificador único da execução.
        started_at (datetime): Timestamp de início.
        sources (Sequence[str]): Nomes das fontes, na ordem de contribuição.

    Returns:
        MergeReport: Relatório inicializado.
    """
    return MergeReport(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "report_version": REPORT_VERSION,
        },
        inputs={"sources": list(sources)},
        result={"status": STATUS_PENDING},
        events=[],
    )


def add_event(
    report: MergeReport,
    *,
    event_type: str,
    ts: datetime,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Adiciona um evento explícito ao Event Log do relatório.

    A ordem do Event Log reflete a ordem de chamada; eventos não são
    reordenados nem deduplicados.
    """
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if payload is not None:
        ev["payload"] = payload
    report.events.append(ev)


def record_check_passed(report: MergeReport, merged: MergedAttributes, *, ts: datetime) -> None:
    """
    Registra uma verificação concluída sem conflitos.

    O hash canônico da árvore mesclada é armazenado em `result`.

    Raises:
        TypeError: Se a árvore mesclada não for um dict (contribuição escalar na raiz).
        NonCanonicalAttributesError: Se a árvore não possuir forma JSON canônica.
    """
    attributes_hash = compute_attributes_hash(merged.tree)
    report.result = {
        "status": STATUS_PASSED,
        "finished_at": _iso(ts),
        "attributes_hash": attributes_hash,
    }
    add_event(
        report,
        event_type="check_passed",
        ts=ts,
        payload={"attributes_hash": attributes_hash},
    )


def record_conflict(report: MergeReport, error: ConflictError, *, ts: datetime) -> None:
    """Registra o conflito que interrompeu a verificação."""
    payload = error.to_payload().to_dict()
    report.result = {
        "status": STATUS_CONFLICT,
        "finished_at": _iso(ts),
        "error": payload,
    }
    add_event(
        report,
        event_type="check_conflict",
        ts=ts,
        payload={
            "attribute_path": error.attribute_path,
            "provided_by": list(error.provided_by),
        },
    )


def save_report(report: MergeReport, path: Path) -> None:
    """
    Persiste o relatório em JSON (UTF-8, chaves ordenadas, indentado).

    Diretórios intermediários são criados automaticamente.

    Raises:
        OSError: Em caso de falha ao criar diretórios ou escrever o arquivo.
        TypeError: Se o conteúdo do relatório não for serializável em JSON.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(report.to_dict(), ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_report(path: Path) -> MergeReport:
    data = json.loads(path.read_text(encoding="utf-8"))
    return MergeReport.from_dict(data)
