# src/topology_builder/core/model/topology.py
"""
Resource Model do Topology Builder.

Este módulo define a representação tipada do estado desejado de um
ambiente de mensageria, produzida pelo parser e consumida pelo differ.

Componentes principais:
    - Role           → enum fechado dos papéis funcionais de um projeto
    - PlatformSystem → membros de um papel (+ artefatos, para connectors)
    - Topic          → tópico com nome renderizado a partir do prefixo do projeto
    - Project        → agrupamento nomeado de papéis, RBAC e tópicos
    - Platform       → componentes transversais opcionais
    - Topology       → documento raiz (context, platform, projects, others)

Invariantes:
    - A Topology é dona exclusiva de Platform e Projects
    - Um Project é dono exclusivo de seus PlatformSystems e Topics
    - Um Project é decorado (prefixo + ordem) exatamente uma vez
    - Somente listas (projects, topics) são sensíveis à ordem

Limites explícitos:
    - Não faz parsing de documentos
    - Não valida charset de nomes (pós-passo global do parser)
    - Não conhece o estado atual do cluster
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .artefact import KafkaConnectArtefact
from .users import PlatformInstance, User


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float))


def scalar_text(value: Any) -> str:
    """Forma textual de um escalar do documento (booleanos em minúsculas, como no YAML)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Role(str, Enum):
    """
    Papéis funcionais de um projeto.

    Os valores coincidem com as chaves do documento de topologia, o que
    facilita serialização e mensagens de erro.

    Invariantes:
        - Um projeto possui no máximo um PlatformSystem por papel
        - Apenas CONNECTORS carrega artefatos
    """
    CONSUMERS = "consumers"
    PRODUCERS = "producers"
    STREAMS = "streams"
    CONNECTORS = "connectors"
    SCHEMAS = "schemas"


@dataclass(frozen=True)
class PlatformSystem:
    """Membros de um papel e, para connectors, os artefatos gerenciados."""

    members: Tuple[User, ...] = ()
    artefacts: Tuple[KafkaConnectArtefact, ...] = ()

    def principals(self) -> List[str]:
        return [m.principal for m in self.members]


@dataclass
class Topic:
    """
    Tópico declarado em um projeto.

    O nome completo só é conhecido após o tópico ser adicionado a um projeto
    decorado: `<prefixo do projeto><sep><name>[<sep><data_type>]`.
    """

    name: str
    data_type: Optional[str] = None
    config: Dict[str, str] = field(default_factory=dict)
    partitions: Optional[int] = None
    replication_factor: Optional[int] = None
    prefix: Optional[str] = field(default=None, compare=False)
    separator: str = field(default=".", compare=False)

    def full_name(self) -> str:
        parts = [self.name] if not self.prefix else [self.prefix, self.name]
        if self.data_type:
            parts.append(self.data_type)
        return self.separator.join(parts)

    def __str__(self) -> str:
        return self.full_name()


@dataclass
class Project:
    """
    Unidade nomeada de tópicos e papéis.

    `decorate` deve ser chamado exatamente uma vez, logo após a construção,
    com o contexto completo da topologia e a ordem atribuída ao projeto.
    Tópicos adicionados depois disso recebem o prefixo do projeto.
    """

    name: str
    systems: Dict[Role, PlatformSystem] = field(default_factory=dict)
    rbac: Dict[str, List[str]] = field(default_factory=dict)
    topics: List[Topic] = field(default_factory=list)
    separator: str = "."
    context: Optional[str] = field(default=None, init=False)
    order: Optional[int] = field(default=None, init=False)

    def decorate(self, *, context: str, order: int) -> None:
        if self.order is not None:
            raise ValueError(f"Project '{self.name}' already decorated (order={self.order})")
        self.context = context
        self.order = order
        for topic in self.topics:
            topic.prefix = self.name_prefix()
            topic.separator = self.separator

    def name_prefix(self) -> str:
        if self.context is None:
            raise ValueError(f"Project '{self.name}' has not been decorated yet")
        return f"{self.context}{self.separator}{self.name}"

    def add_topic(self, topic: Topic) -> None:
        topic.separator = self.separator
        if self.context is not None:
            topic.prefix = self.name_prefix()
        self.topics.append(topic)

    def system(self, role: Role) -> Optional[PlatformSystem]:
        return self.systems.get(role)

    def members(self, role: Role) -> Tuple[User, ...]:
        ps = self.systems.get(role)
        return ps.members if ps is not None else ()

    @property
    def consumers(self) -> Tuple[User, ...]:
        return self.members(Role.CONSUMERS)

    @property
    def producers(self) -> Tuple[User, ...]:
        return self.members(Role.PRODUCERS)

    @property
    def streams(self) -> Tuple[User, ...]:
        return self.members(Role.STREAMS)

    @property
    def connectors(self) -> Tuple[User, ...]:
        return self.members(Role.CONNECTORS)

    @property
    def schemas(self) -> Tuple[User, ...]:
        return self.members(Role.SCHEMAS)

    @property
    def artefacts(self) -> Tuple[KafkaConnectArtefact, ...]:
        ps = self.systems.get(Role.CONNECTORS)
        return ps.artefacts if ps is not None else ()

    def topic_names(self) -> List[str]:
        return [t.full_name() for t in self.topics]


@dataclass(frozen=True)
class PlatformComponent:
    instances: Tuple[PlatformInstance, ...] = ()


@dataclass
class Platform:
    """Componentes transversais opcionais; a ausência de todos é válida."""

    kafka: Optional[PlatformComponent] = None
    kafka_connect: Optional[PlatformComponent] = None
    schema_registry: Optional[PlatformComponent] = None
    control_center: Optional[PlatformComponent] = None

    def is_empty(self) -> bool:
        return all(
            c is None
            for c in (self.kafka, self.kafka_connect, self.schema_registry, self.control_center)
        )


@dataclass
class Topology:
    """
    Documento raiz do estado desejado.

    Campos:
        - context: nome do contexto (não vazio)
        - platform: componentes transversais
        - projects: projetos, na ordem do documento
        - others: atributos de topo não reconhecidos, preservados na ordem original

    O contexto completo (`full_context`) concatena o contexto e os valores
    de `others`, e é a base do prefixo qualificado de cada projeto.
    """

    context: str
    platform: Platform = field(default_factory=Platform)
    projects: List[Project] = field(default_factory=list)
    others: Dict[str, Any] = field(default_factory=dict)
    separator: str = "."
    _order: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.context, str) or not self.context.strip():
            raise ValueError("topology context must be a non-empty string")

    def add_other(self, key: str, value: Any) -> None:
        self.others[key] = value

    def next_order(self) -> int:
        self._order += 1
        return self._order

    def full_context(self) -> str:
        # atributos estruturados (listas, mapas) não participam do prefixo
        parts = [self.context] + [
            scalar_text(v) for v in self.others.values() if is_scalar(v)
        ]
        return self.separator.join(parts)

    def add_project(self, project: Project) -> None:
        self.projects.append(project)

    def topic_names(self) -> List[str]:
        names: List[str] = []
        for project in self.projects:
            names.extend(project.topic_names())
        return names
