"""
Contratos dos colaboradores externos chamados pelas Actions.

O core não sabe como um tópico é fisicamente criado nem como ACLs,
contas ou connectors chegam ao cluster: isso é responsabilidade de
implementações destes protocolos (admin client, schema registry,
Kafka Connect, ...). Retry, timeout e cancelamento também são delas.
"""

from __future__ import annotations

from typing import Dict, List, Protocol, runtime_checkable

from topology_builder.core.model.artefact import KafkaConnectArtefact
from topology_builder.core.model.state import ServiceAccount, TopologyAclBinding


@runtime_checkable
class TopicProvider(Protocol):
    def create_or_update_topic(self, name: str, config: Dict[str, str]) -> None:
        ...

    def delete_topics(self, names: List[str]) -> None:
        ...


@runtime_checkable
class AccessControlProvider(Protocol):
    def create_bindings(self, bindings: List[TopologyAclBinding]) -> None:
        ...

    def clear_bindings(self, bindings: List[TopologyAclBinding]) -> None:
        ...


@runtime_checkable
class AccountProvider(Protocol):
    def create_accounts(self, accounts: List[ServiceAccount]) -> None:
        ...

    def clear_accounts(self, accounts: List[ServiceAccount]) -> None:
        ...


@runtime_checkable
class ArtefactProvider(Protocol):
    def create_artefact(self, artefact: KafkaConnectArtefact) -> None:
        ...

    def delete_artefact(self, artefact: KafkaConnectArtefact) -> None:
        ...
