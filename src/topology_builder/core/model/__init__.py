"""
Resource Model e estado reconciliado do Topology Builder.

- topology → Topology, Platform, Project, PlatformSystem, Topic, Role
- users    → membros tipados de cada papel
- artefact → artefatos gerenciados (Kafka Connect)
- state    → ServiceAccount, TopologyAclBinding, ReconciledState
"""

from .artefact import KafkaConnectArtefact
from .state import ReconciledState, ServiceAccount, TopologyAclBinding
from .topology import (
    Platform,
    PlatformComponent,
    PlatformSystem,
    Project,
    Role,
    Topic,
    Topology,
)
from .users import Connector, Consumer, KStream, PlatformInstance, Producer, Schemas, User

__all__ = [
    "KafkaConnectArtefact",
    "ReconciledState",
    "ServiceAccount",
    "TopologyAclBinding",
    "Platform",
    "PlatformComponent",
    "PlatformSystem",
    "Project",
    "Role",
    "Topic",
    "Topology",
    "Connector",
    "Consumer",
    "KStream",
    "PlatformInstance",
    "Producer",
    "Schemas",
    "User",
]
