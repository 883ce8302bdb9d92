# tests/core/config/test_merge.py
"""
Testes da política de deep-merge da configuração.

Política (v1):
    - dict → merge recursivo
    - list → sobrescrita total
    - escalar → sobrescrita
    - conflito de tipos → ConfigTypeConflictError
"""

import pytest

from topology_builder.core.config.errors import ConfigTypeConflictError
from topology_builder.core.config.merge import deep_merge


def test_merge_simple_override():
    base = {"backend": {"type": "file", "path": "a.json"}}
    override = {"backend": {"path": "b.json"}}

    merged = deep_merge(base, override)

    assert merged == {"backend": {"type": "file", "path": "b.json"}}
    assert base["backend"]["path"] == "a.json"


def test_merge_nested_dict_keeps_unrelated_keys():
    base = {"platform": {"kafka_connect": {"servers": {"primary": "u1"}}}}
    override = {"platform": {"kafka_connect": {"servers": {"secondary": "u2"}}}}

    merged = deep_merge(base, override)

    assert merged["platform"]["kafka_connect"]["servers"] == {"primary": "u1", "secondary": "u2"}


def test_merge_list_override_total():
    merged = deep_merge({"tags": ["a", "b"]}, {"tags": ["c"]})
    assert merged == {"tags": ["c"]}


def test_merge_type_conflict_raises():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"backend": {"type": "file"}}, {"backend": "memory"})


def test_merge_requires_dicts_at_root():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["a"])  # type: ignore[arg-type]
