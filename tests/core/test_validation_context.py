# tests/core/test_validation_context.py
"""
Testes de logging estruturado e coleta de warnings no ValidationContext.

Os testes asseguram que:
- eventos de log são registrados de forma estruturada
- cada evento contém `run_id`, `stage`, `level`, `message` e `timestamp`
- campos adicionais são preservados sem perda
- warnings são agrupados por estágio, na ordem de inserção
- fontes e conflitos são registrados na ordem em que ocorrem
"""

import pytest

try:
    from attribute_merge.core.context import ValidationContext
except Exception as e:  # noqa: BLE001
    ValidationContext = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing ValidationContext logging/warnings API. Implement:"
            "- src/attribute_merge/core/context.py (log, add_warning, events, warnings)"
            f"Import error: {_IMPORT_ERR}"
        )


def test_structured_log_event(dummy_ctx):
    _require_imports()
    dummy_ctx.log(stage="attributes.check", level="INFO", message="hello", foo=1)

    assert len(dummy_ctx.events) == 1
    ev = dummy_ctx.events[-1]
    assert ev["run_id"] == dummy_ctx.run_id
    assert ev["stage"] == "attributes.check"
    assert ev["level"] == "INFO"
    assert ev["message"] == "hello"
    assert ev["foo"] == 1
    assert ev["timestamp"].endswith("+00:00")


def test_warning_collection(dummy_ctx):
    _require_imports()
    dummy_ctx.add_warning(stage="policyfile.declarations", message="first")
    dummy_ctx.add_warning(stage="policyfile.declarations", message="second")

    assert dummy_ctx.warnings == {"policyfile.declarations": ["first", "second"]}


def test_sources_are_recorded_in_order_with_repeats(dummy_ctx):
    _require_imports()
    dummy_ctx.record_source("foo", path="foo.yaml")
    dummy_ctx.record_source("bar")
    dummy_ctx.record_source("foo", path="foo-extra.yaml")

    assert dummy_ctx.source_names == ["foo", "bar", "foo"]
    assert dummy_ctx.sources[0] == {"source_name": "foo", "path": "foo.yaml"}


def test_conflicts_are_recorded(dummy_ctx):
    _require_imports()
    assert not dummy_ctx.has_conflicts

    dummy_ctx.record_conflict(attribute_path="[a][b]", provided_by=("foo", "bar"))

    assert dummy_ctx.has_conflicts
    assert dummy_ctx.conflicts == [{"attribute_path": "[a][b]", "provided_by": ["foo", "bar"]}]


def test_events_for_source(dummy_ctx):
    _require_imports()
    dummy_ctx.log(stage="attributes.load", level="DEBUG", message="a", source_name="foo")
    dummy_ctx.log(stage="attributes.load", level="DEBUG", message="b", source_name="bar")
    dummy_ctx.log(stage="attributes.check", level="INFO", message="c")

    assert [e["message"] for e in dummy_ctx.events_for_source("foo")] == ["a"]
