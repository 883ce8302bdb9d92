# tests/core/config/test_hashing.py
"""
Testes do hashing canônico (configuração e estado persistido).
"""

import hashlib
import json

import pytest

from topology_builder.core.config.hashing import canonical_json, compute_config_hash, compute_hash


def test_hash_is_deterministic_regardless_of_key_order():
    a = {"backend": {"type": "file", "path": "x"}, "topology": {"separator": "."}}
    b = {"topology": {"separator": "."}, "backend": {"path": "x", "type": "file"}}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_matches_sha256_of_canonical_json():
    cfg = {"b": 1, "a": [1, 2]}
    expected = hashlib.sha256(
        json.dumps(cfg, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    ).hexdigest()
    assert compute_config_hash(cfg) == expected
    assert canonical_json(cfg) == '{"a":[1,2],"b":1}'


def test_hash_changes_on_change():
    assert compute_hash({"topics": ["a"]}) != compute_hash({"topics": ["a", "b"]})


def test_config_hash_requires_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])  # type: ignore[arg-type]
