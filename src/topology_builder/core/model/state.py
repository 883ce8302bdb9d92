# src/topology_builder/core/model/state.py
"""
Estado reconciliado do Topology Builder.

Este módulo define os valores rastreados entre execuções (bindings de ACL,
service accounts, tópicos e artefatos) e o `ReconciledState`, o valor
coeso que concentra as operações de atualização por tipo.

Princípios fundamentais:
    - Semântica de conjunto para todos os tipos rastreados
    - Toda mutação ocorre por operações nomeadas
    - Serialização determinística (listas ordenadas)

Invariantes:
    - ServiceAccount é identificado apenas pelo principal
    - Bindings e artefatos possuem semântica de valor
    - `from_dict(to_dict(s)) == s`

Limites explícitos:
    - Não persiste estado (responsabilidade do BackendController)
    - Não executa actions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from .artefact import KafkaConnectArtefact


@dataclass(frozen=True)
class ServiceAccount:
    """Identidade de um principal; igualdade e hash apenas pelo `principal`."""

    principal: str
    description: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"principal": self.principal, "description": self.description}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceAccount":
        return cls(principal=str(data["principal"]), description=data.get("description"))


@dataclass(frozen=True)
class TopologyAclBinding:
    """
    Concessão de controle de acesso.

    Campos seguem o modelo de ACLs do cluster: tipo e nome do recurso,
    host, operação, principal e tipo de padrão (LITERAL/PREFIXED).
    """

    resource_type: str
    resource_name: str
    host: str
    operation: str
    principal: str
    pattern_type: str = "LITERAL"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_type": self.resource_type,
            "resource_name": self.resource_name,
            "host": self.host,
            "operation": self.operation,
            "principal": self.principal,
            "pattern_type": self.pattern_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TopologyAclBinding":
        return cls(
            resource_type=str(data["resource_type"]),
            resource_name=str(data["resource_name"]),
            host=str(data.get("host", "*")),
            operation=str(data["operation"]),
            principal=str(data["principal"]),
            pattern_type=str(data.get("pattern_type", "LITERAL")),
        )

    def sort_key(self) -> tuple:
        return (
            self.principal,
            self.resource_type,
            self.resource_name,
            self.operation,
            self.host,
            self.pattern_type,
        )

    def __str__(self) -> str:
        return (
            f"'{self.resource_type}', '{self.resource_name}', '{self.host}', "
            f"'{self.operation}', '{self.principal}', '{self.pattern_type}'"
        )


@dataclass
class ReconciledState:
    """
    Snapshot dos quatro conjuntos rastreados.

    Operações nomeadas por tipo substituem a manipulação direta de conjuntos,
    centralizando a lógica de fold do plano de execução.
    """

    bindings: Set[TopologyAclBinding] = field(default_factory=set)
    service_accounts: Set[ServiceAccount] = field(default_factory=set)
    topics: Set[str] = field(default_factory=set)
    artefacts: Set[KafkaConnectArtefact] = field(default_factory=set)

    # -----------------------------
    # Topics
    # -----------------------------
    def add_topic(self, name: str) -> None:
        self.topics.add(name)

    def remove_topics(self, names: Iterable[str]) -> None:
        self.topics = self.topics - set(names)

    # -----------------------------
    # Bindings
    # -----------------------------
    def add_bindings(self, bindings: Iterable[TopologyAclBinding]) -> None:
        self.bindings.update(bindings)

    def remove_bindings(self, bindings: Iterable[TopologyAclBinding]) -> None:
        self.bindings = self.bindings - set(bindings)

    # -----------------------------
    # Service accounts
    # -----------------------------
    def add_accounts(self, accounts: Iterable[ServiceAccount]) -> None:
        self.service_accounts.update(accounts)

    def remove_accounts(self, accounts: Iterable[ServiceAccount]) -> None:
        principals = {a.principal for a in accounts}
        self.service_accounts = {
            sa for sa in self.service_accounts if sa.principal not in principals
        }

    # -----------------------------
    # Artefacts
    # -----------------------------
    def add_artefact(self, artefact: KafkaConnectArtefact) -> None:
        self.artefacts.add(artefact)

    def remove_artefact(self, artefact: KafkaConnectArtefact) -> None:
        self.artefacts = {a for a in self.artefacts if a != artefact}

    # -----------------------------
    # Snapshot helpers
    # -----------------------------
    def size(self) -> int:
        return len(self.bindings) + len(self.service_accounts) + len(self.topics) + len(self.artefacts)

    def is_empty(self) -> bool:
        return self.size() == 0

    def copy(self) -> "ReconciledState":
        return ReconciledState(
            bindings=set(self.bindings),
            service_accounts=set(self.service_accounts),
            topics=set(self.topics),
            artefacts=set(self.artefacts),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bindings": [b.to_dict() for b in sorted(self.bindings, key=lambda b: b.sort_key())],
            "service_accounts": [
                sa.to_dict() for sa in sorted(self.service_accounts, key=lambda sa: sa.principal)
            ],
            "topics": sorted(self.topics),
            "connectors": [
                a.to_dict()
                for a in sorted(self.artefacts, key=lambda a: (a.server_label, a.name, a.path))
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReconciledState":
        return cls(
            bindings={TopologyAclBinding.from_dict(b) for b in data.get("bindings", []) or []},
            service_accounts={
                ServiceAccount.from_dict(sa) for sa in data.get("service_accounts", []) or []
            },
            topics={str(t) for t in data.get("topics", []) or []},
            artefacts={
                KafkaConnectArtefact.from_dict(a) for a in data.get("connectors", []) or []
            },
        )
