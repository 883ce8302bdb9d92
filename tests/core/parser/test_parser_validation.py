# tests/core/parser/test_parser_validation.py
"""
Testes de validação semântica do parser.

Os testes asseguram que:
- artefatos exigem path, name e server_label
- o server_label de um artefato deve ser um alias declarado na configuração
- `artefacts` e `artifacts` são sinônimos
- nomes completos de tópicos respeitam o charset ASCII permitido
- partições e fator de replicação são inteiros; valores ilegais falham com erro descritivo
- o parsing é determinístico e insensível à ordem de chaves de mapas
"""

import copy

import pytest

from topology_builder.core.exceptions import (
    ArtefactValidationError,
    InvalidTopicNameError,
    TopologyParsingError,
)
from topology_builder.core.parser import VALID_TOPIC_CHARACTERS, parse_topology


def _doc_with_artefacts(artefacts, key="artefacts"):
    return {
        "context": "prod",
        "projects": [
            {
                "name": "p1",
                "connectors": {"access_control": [{"principal": "User:Connect"}], key: artefacts},
                "topics": [{"name": "orders"}],
            }
        ],
    }


def test_unknown_server_alias_fails(dummy_config):
    """Artefato com label 'unknown' e aliases {'primary'} → erro nomeando 'unknown'."""
    doc = _doc_with_artefacts([{"path": "/connectors/x", "server_label": "unknown", "name": "x"}])

    with pytest.raises(ArtefactValidationError) as exc:
        parse_topology(doc, dummy_config)

    assert "unknown" in str(exc.value)
    assert exc.value.details["reason"] == "unknown_server_label"
    assert exc.value.details["allowed_labels"] == ["primary"]


def test_declared_server_alias_is_accepted(dummy_config):
    doc = _doc_with_artefacts([{"path": "/connectors/x", "server_label": "primary", "name": "x"}])

    project = parse_topology(doc, dummy_config).projects[0]

    assert [(a.server_label, a.name, a.path) for a in project.artefacts] == [
        ("primary", "x", "/connectors/x")
    ]


def test_artifacts_synonym_key(dummy_config):
    doc = _doc_with_artefacts(
        [{"path": "/connectors/x", "server_label": "primary", "name": "x"}], key="artifacts"
    )
    assert len(parse_topology(doc, dummy_config).projects[0].artefacts) == 1


def test_no_aliases_configured_rejects_every_artefact():
    doc = _doc_with_artefacts([{"path": "/connectors/x", "server_label": "primary", "name": "x"}])
    with pytest.raises(ArtefactValidationError):
        parse_topology(doc, {})


@pytest.mark.parametrize("missing", ["path", "server_label", "name"])
def test_artefact_mandatory_fields(missing, dummy_config):
    artefact = {"path": "/connectors/x", "server_label": "primary", "name": "x"}
    artefact[missing] = None

    with pytest.raises(ArtefactValidationError) as exc:
        parse_topology(_doc_with_artefacts([artefact]), dummy_config)

    assert "mandatory" in str(exc.value)
    assert exc.value.details["reason"] == "missing_field"


@pytest.mark.parametrize("name", ["ordérs", "orders with space", "orders/1", "pedidos:v1"])
def test_illegal_topic_name(name, dummy_config):
    doc = {"context": "prod", "projects": [{"name": "p1", "topics": [{"name": name}]}]}

    with pytest.raises(InvalidTopicNameError) as exc:
        parse_topology(doc, dummy_config)

    assert f"prod.p1.{name}" in str(exc.value)
    assert VALID_TOPIC_CHARACTERS in str(exc.value)


def test_illegal_character_in_context_is_caught_by_post_pass(dummy_config):
    doc = {"context": "prod ção", "projects": [{"name": "p1", "topics": [{"name": "orders"}]}]}
    with pytest.raises(InvalidTopicNameError):
        parse_topology(doc, dummy_config)


def test_legal_topic_charset(dummy_config):
    doc = {"context": "prod", "projects": [{"name": "p-1", "topics": [{"name": "Orders_v2.x-y"}]}]}
    assert parse_topology(doc, dummy_config).topic_names() == ["prod.p-1.Orders_v2.x-y"]


def test_parsing_is_deterministic(full_document, dummy_config):
    first = parse_topology(copy.deepcopy(full_document), dummy_config)
    second = parse_topology(copy.deepcopy(full_document), dummy_config)
    assert first == second


def test_map_key_order_does_not_matter(full_document, dummy_config):
    reordered = copy.deepcopy(full_document)
    project = reordered["projects"][0]
    reordered["projects"][0] = dict(reversed(list(project.items())))

    assert parse_topology(reordered, dummy_config) == parse_topology(full_document, dummy_config)


def test_project_order_is_significant(dummy_config):
    doc = {
        "context": "prod",
        "projects": [
            {"name": "a", "topics": [{"name": "t"}]},
            {"name": "b", "topics": [{"name": "t"}]},
        ],
    }
    swapped = {"context": "prod", "projects": list(reversed(doc["projects"]))}

    assert parse_topology(doc, dummy_config).topic_names() == ["prod.a.t", "prod.b.t"]
    assert parse_topology(swapped, dummy_config) != parse_topology(doc, dummy_config)


def _doc_with_topic(**topic):
    return {"context": "prod", "projects": [{"name": "p1", "topics": [dict(name="t", **topic)]}]}


def test_topic_counts_accept_integers_and_digit_strings(dummy_config):
    topic = parse_topology(_doc_with_topic(partitions=3, replication_factor="2"), dummy_config).projects[0].topics[0]
    assert (topic.partitions, topic.replication_factor) == (3, 2)


def test_topic_counts_fall_back_to_config_keys(dummy_config):
    doc = _doc_with_topic(config={"num.partitions": "6", "replication.factor": 3})
    topic = parse_topology(doc, dummy_config).projects[0].topics[0]
    assert (topic.partitions, topic.replication_factor) == (6, 3)


def test_non_numeric_partitions_fail(dummy_config):
    with pytest.raises(TopologyParsingError) as exc:
        parse_topology(_doc_with_topic(partitions="many"), dummy_config)

    assert "partitions" in str(exc.value)
    assert exc.value.details == {"topic": "t", "project": "p1", "key": "partitions", "value": "many"}


@pytest.mark.parametrize(
    "key, value",
    [("partitions", 3.9), ("partitions", True), ("replication_factor", 1.5), ("replication_factor", "-1")],
)
def test_fractional_or_boolean_counts_fail(dummy_config, key, value):
    with pytest.raises(TopologyParsingError) as exc:
        parse_topology(_doc_with_topic(**{key: value}), dummy_config)

    assert exc.value.details["key"] == key
    assert exc.value.details["project"] == "p1"


def test_invalid_count_in_topic_config_names_config_key(dummy_config):
    with pytest.raises(TopologyParsingError) as exc:
        parse_topology(_doc_with_topic(config={"replication.factor": "three"}), dummy_config)

    assert exc.value.details["key"] == "replication.factor"
