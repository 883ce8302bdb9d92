# tests/core/plan/test_execution_plan_failure.py
"""
Testes da política de falha do ExecutionPlan.

Os testes asseguram que:
- a primeira falha é logada e propagada sem encapsulamento adicional
- nenhuma action posterior executa
- o backend mantém o snapshot do último run bem sucedido
- o estado de trabalho descarta os folds parciais do run que falhou
- falhas de load impedem a construção do plano
"""

import logging

import pytest

from topology_builder.core.actions import SyncTopicAction
from topology_builder.core.backend import FileBackend, InMemoryBackend
from topology_builder.core.exceptions import ActionExecutionError, BackendIOError
from topology_builder.core.model.state import ReconciledState
from topology_builder.core.plan import ExecutionPlan


class ExplodingAction:
    """Action mínima (duck typing) cuja execução sempre falha."""

    effect = None
    bindings = ()

    def run(self):
        raise RuntimeError("boom")

    def __str__(self):
        return "Exploding {}"


def test_failure_mid_run_preserves_prior_commit(make_provider):
    provider = make_provider(fail_on={"delete_topics"})
    previous = ReconciledState(topics={"t0"})
    backend = InMemoryBackend(previous)

    plan = ExecutionPlan.init(backend)
    plan.add(SyncTopicAction(provider, "t1"))
    plan.add(ExplodingAction())
    plan.add(SyncTopicAction(provider, "t2"))

    with pytest.raises(RuntimeError, match="boom"):
        plan.run()

    assert [c[1][0] for c in provider.calls] == ["t1"]
    assert backend.flush_count == 0
    assert backend.persisted == previous
    assert plan.topics == {"t0"}


def test_action_error_is_logged_with_description(make_provider, caplog):
    provider = make_provider(fail_on={"create_or_update_topic"})
    plan = ExecutionPlan.init(InMemoryBackend())
    plan.add(SyncTopicAction(provider, "t1"))

    with caplog.at_level(logging.ERROR, logger="topology_builder.core.plan.execution_plan"):
        with pytest.raises(ActionExecutionError):
            plan.run()

    assert "SyncTopic {topic=t1}" in caplog.text
    errors = plan.ctx.events_at("ERROR")
    assert len(errors) == 1
    assert errors[0]["error"]["type"] == "ActionExecutionError"
    assert errors[0]["error"]["details"]["action"] == "SyncTopic {topic=t1}"


def test_plain_exception_is_mapped_to_execution_payload():
    plan = ExecutionPlan.init(InMemoryBackend())
    plan.add(ExplodingAction())

    with pytest.raises(RuntimeError):
        plan.run()

    error = plan.ctx.events_at("ERROR")[0]["error"]
    assert error["type"] == "PLAN_EXECUTION_ERROR"
    assert error["details"] == {"action": "Exploding {}", "exc_type": "RuntimeError", "exc_message": "boom"}


def test_load_failure_prevents_plan(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("corrupted", encoding="utf-8")

    with pytest.raises(BackendIOError):
        ExecutionPlan.init(FileBackend(path))


def test_file_backend_keeps_previous_commit_on_failure(tmp_path, provider, make_provider):
    path = tmp_path / "state.json"
    first = ExecutionPlan.init(FileBackend(path))
    first.add(SyncTopicAction(provider, "t1"))
    first.run()

    failing = make_provider(fail_on={"create_or_update_topic"})
    second = ExecutionPlan.init(FileBackend(path))
    second.add(SyncTopicAction(provider, "t2"))
    second.add(SyncTopicAction(failing, "t3"))
    with pytest.raises(ActionExecutionError):
        second.run()

    reader = FileBackend(path)
    reader.load()
    assert reader.topics() == {"t1"}


def test_rerun_after_failure_starts_from_last_good_state(make_provider, provider):
    failing = make_provider(fail_on={"create_or_update_topic"})
    backend = InMemoryBackend(ReconciledState(topics={"t0"}))

    plan = ExecutionPlan.init(backend)
    plan.add(SyncTopicAction(provider, "t1"))
    plan.add(SyncTopicAction(failing, "t2"))
    with pytest.raises(ActionExecutionError):
        plan.run()

    assert plan.topics == {"t0"}
    assert plan.state == backend.persisted
