"""
Parser do documento de topologia do Topology Builder.

Transforma o documento de topologia em uma `Topology` validada.
"""

from .parser import (
    ROLE_PARSERS,
    TOPIC_NAME_PATTERN,
    VALID_TOPIC_CHARACTERS,
    load_topology,
    parse_topology,
    validate_topic_name,
)

__all__ = [
    "ROLE_PARSERS",
    "TOPIC_NAME_PATTERN",
    "VALID_TOPIC_CHARACTERS",
    "load_topology",
    "parse_topology",
    "validate_topic_name",
]
