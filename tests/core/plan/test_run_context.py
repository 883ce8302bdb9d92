# tests/core/plan/test_run_context.py
"""
Testes do RunContext: identidade do run e hash da configuração efetiva.
"""

from topology_builder.core.config.hashing import compute_config_hash
from topology_builder.core.plan import RunContext


def test_config_hash_is_recorded_in_meta(dummy_config):
    ctx = RunContext.new(config=dummy_config)

    assert ctx.meta["config_hash"] == compute_config_hash(dummy_config)
    assert ctx.config == dummy_config


def test_no_config_means_no_hash():
    ctx = RunContext.new(owner="ci")

    assert ctx.meta == {"owner": "ci"}
    assert ctx.config == {}


def test_events_carry_run_id_in_order():
    ctx = RunContext.new()
    ctx.log(action="a", level="INFO", message="first")
    ctx.log(action=None, level="ERROR", message="second")

    assert [e["message"] for e in ctx.events] == ["first", "second"]
    assert {e["run_id"] for e in ctx.events} == {ctx.run_id}
    assert [e["message"] for e in ctx.events_at("ERROR")] == ["second"]
