# src/topology_builder/core/parser/parser.py
"""
Parser canônico do documento de topologia.

Este módulo transforma um documento hierárquico (dict vindo de YAML/JSON)
em uma `Topology` tipada e validada.

Etapas:
    1. Chaves obrigatórias de topo (`context`, `projects`)
    2. Atributos de topo não reconhecidos → passthrough (`others`)
    3. Componentes de plataforma, cada um opcional
    4. Projetos, na ordem do documento: papéis, RBAC, decoração, tópicos
    5. Pós-passo global: charset dos nomes completos de tópicos

Decisões arquiteturais:
    - Cada papel (`Role`) tem seu parser tipado, invocado incondicionalmente;
      seção ausente é um valor normal (`None`)
    - A validação de nomes é global porque o nome completo depende da
      decoração do projeto, aplicada após sua construção
    - Qualquer violação aborta o parsing imediatamente

Invariantes:
    - Mesma entrada + mesma configuração ⇒ mesma Topology
    - A ordem de chaves de mapas não afeta o resultado

Limites explícitos:
    - Não compara com o estado atual do cluster
    - Não gera actions
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Union

from topology_builder.core.config.loader import (
    kafka_connect_server_aliases,
    read_structured_file,
    topic_separator,
)
from topology_builder.core.errors import (
    topology_invalid_artefact,
    topology_invalid_topic_name,
    topology_missing_key,
)
from topology_builder.core.exceptions import (
    ArtefactValidationError,
    InvalidTopicNameError,
    MissingRequiredKeyError,
    TopologyParsingError,
)
from topology_builder.core.model.artefact import KafkaConnectArtefact
from topology_builder.core.model.topology import (
    Platform,
    PlatformComponent,
    PlatformSystem,
    Project,
    Role,
    Topic,
    Topology,
    is_scalar,
    scalar_text,
)
from topology_builder.core.model.users import (
    Connector,
    Consumer,
    KStream,
    PlatformInstance,
    Producer,
    Schemas,
    User,
)


logger = logging.getLogger(__name__)

CONTEXT_KEY = "context"
PROJECTS_KEY = "projects"
PLATFORM_KEY = "platform"

NAME_KEY = "name"
TOPICS_KEY = "topics"
RBAC_KEY = "rbac"
PRINCIPAL_KEY = "principal"

ACCESS_CONTROL_KEY = "access_control"
ARTEFACT_KEYS = ("artefacts", "artifacts")

PLATFORM_COMPONENTS = ("kafka", "kafka_connect", "schema_registry", "control_center")

TOPIC_NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")
VALID_TOPIC_CHARACTERS = "ASCII alphanumerics, '.', '_' and '-'"


@dataclass(frozen=True)
class _ProjectScope:
    project: str
    server_aliases: Set[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _as_list(node: Any, *, what: str, project: Optional[str] = None) -> List[Any]:
    if node is None:
        return []
    if not isinstance(node, list):
        where = f" in project '{project}'" if project else ""
        raise TopologyParsingError(
            message=f"'{what}'{where} must be a list, got {type(node).__name__}",
            details={"key": what, "project": project},
        )
    return node


def _str_tuple(node: Any) -> Tuple[str, ...]:
    if node is None:
        return ()
    if isinstance(node, (list, tuple)):
        return tuple(str(v) for v in node)
    return (str(node),)


def _principal(entry: Any, *, role: str, scope: _ProjectScope) -> str:
    if not isinstance(entry, dict) or entry.get(PRINCIPAL_KEY) is None:
        raise MissingRequiredKeyError(
            message=f"'{PRINCIPAL_KEY}' is missing for a {role} entry of project: {scope.project}",
            details=topology_missing_key(missing_keys=[PRINCIPAL_KEY], project=scope.project).details,
        )
    return str(entry[PRINCIPAL_KEY])


def _read_write(entry: Dict[str, Any]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    topics = entry.get(TOPICS_KEY) or {}
    if not isinstance(topics, dict):
        return (), ()
    return _str_tuple(topics.get("read")), _str_tuple(topics.get("write"))


# ---------------------------------------------------------------------------
# Parsers por papel
# ---------------------------------------------------------------------------

def _parse_members(
    node: Any,
    role: Role,
    scope: _ProjectScope,
    build: Callable[[str, Dict[str, Any]], User],
) -> Tuple[User, ...]:
    entries = _as_list(node, what=role.value, project=scope.project)
    return tuple(build(_principal(e, role=role.value, scope=scope), e) for e in entries)


def _parse_consumers(node: Any, scope: _ProjectScope) -> Optional[PlatformSystem]:
    if node is None:
        return None
    members = _parse_members(
        node, Role.CONSUMERS, scope,
        lambda p, e: Consumer(principal=p, group=e.get("group")),
    )
    return PlatformSystem(members=members)


def _parse_producers(node: Any, scope: _ProjectScope) -> Optional[PlatformSystem]:
    if node is None:
        return None
    members = _parse_members(
        node, Role.PRODUCERS, scope,
        lambda p, e: Producer(
            principal=p,
            transactional_id=e.get("transactionId", e.get("transactional_id")),
            idempotence=bool(e.get("idempotence", False)),
        ),
    )
    return PlatformSystem(members=members)


def _parse_streams(node: Any, scope: _ProjectScope) -> Optional[PlatformSystem]:
    if node is None:
        return None

    def build(p: str, e: Dict[str, Any]) -> User:
        read, write = _read_write(e)
        return KStream(
            principal=p,
            application_id=e.get("applicationId", e.get("application_id")),
            read_topics=read,
            write_topics=write,
        )

    return PlatformSystem(members=_parse_members(node, Role.STREAMS, scope, build))


def _parse_schemas(node: Any, scope: _ProjectScope) -> Optional[PlatformSystem]:
    if node is None:
        return None
    members = _parse_members(
        node, Role.SCHEMAS, scope,
        lambda p, e: Schemas(principal=p, subjects=_str_tuple(e.get("subjects"))),
    )
    return PlatformSystem(members=members)


def _parse_artefact(entry: Any, scope: _ProjectScope) -> KafkaConnectArtefact:
    if not isinstance(entry, dict):
        entry = {}
    path = entry.get("path")
    label = entry.get("server_label")
    name = entry.get("name")

    if path is None or label is None or name is None:
        payload = topology_invalid_artefact(artefact=dict(entry), reason="missing_field")
        raise ArtefactValidationError(
            message=(
                f"KafkaConnect: path, name and server_label are artefact mandatory fields "
                f"(project: {scope.project})"
            ),
            details=payload.details,
            hint=payload.hint,
        )

    if str(label) not in scope.server_aliases:
        payload = topology_invalid_artefact(
            artefact=dict(entry),
            reason="unknown_server_label",
            allowed_labels=sorted(scope.server_aliases),
        )
        raise ArtefactValidationError(
            message=(
                f"KafkaConnect: Server alias label {label} does not exist on the "
                f"provided configuration, please check"
            ),
            details=payload.details,
            hint=payload.hint,
        )

    return KafkaConnectArtefact(server_label=str(label), name=str(name), path=str(path))


def _parse_connectors(node: Any, scope: _ProjectScope) -> Optional[PlatformSystem]:
    if node is None:
        return None

    acl_node: Any = node
    artefacts: Tuple[KafkaConnectArtefact, ...] = ()

    if isinstance(node, dict):
        acl_node = node.get(ACCESS_CONTROL_KEY)
        key = next((k for k in ARTEFACT_KEYS if k in node), None)
        if key is not None:
            entries = _as_list(node.get(key), what=key, project=scope.project)
            artefacts = tuple(_parse_artefact(e, scope) for e in entries)

    def build(p: str, e: Dict[str, Any]) -> User:
        read, write = _read_write(e)
        return Connector(
            principal=p,
            connectors=_str_tuple(e.get("connectors")),
            read_topics=read,
            write_topics=write,
        )

    members = _parse_members(acl_node, Role.CONNECTORS, scope, build)
    return PlatformSystem(members=members, artefacts=artefacts)


ROLE_PARSERS: Dict[Role, Callable[[Any, _ProjectScope], Optional[PlatformSystem]]] = {
    Role.CONSUMERS: _parse_consumers,
    Role.PRODUCERS: _parse_producers,
    Role.STREAMS: _parse_streams,
    Role.CONNECTORS: _parse_connectors,
    Role.SCHEMAS: _parse_schemas,
}

if set(ROLE_PARSERS) != set(Role):  # pragma: no cover
    raise RuntimeError(f"ROLE_PARSERS must cover every Role: {sorted(r.value for r in Role)}")


# ---------------------------------------------------------------------------
# Platform / RBAC / Topics
# ---------------------------------------------------------------------------

def _parse_platform(node: Any) -> Platform:
    platform = Platform()
    if not isinstance(node, dict) or not node:
        logger.debug("No platform components defined in the topology.")
        return platform

    for key in PLATFORM_COMPONENTS:
        component = node.get(key)
        if component is None:
            logger.debug("%s key is missing.", key)
            continue
        entries = component.get("instances") if isinstance(component, dict) else component
        instances = []
        for e in _as_list(entries, what=f"{PLATFORM_KEY}.{key}"):
            if not isinstance(e, dict) or e.get(PRINCIPAL_KEY) is None:
                raise MissingRequiredKeyError(
                    message=f"'{PRINCIPAL_KEY}' is missing for a {PLATFORM_KEY}.{key} instance",
                    details={"missing_keys": [PRINCIPAL_KEY], "component": key},
                )
            instances.append(
                PlatformInstance(
                    principal=str(e[PRINCIPAL_KEY]),
                    app_id=e.get("appId", e.get("app_id")),
                )
            )
        setattr(platform, key, PlatformComponent(instances=tuple(instances)))
        logger.debug("Extracting key %s with %d instance(s)", key, len(instances))

    return platform


def _parse_rbac(node: Any, scope: _ProjectScope) -> Dict[str, List[str]]:
    """Mapa papel → principals. Aceita lista de mapas de uma chave ou um mapa direto."""
    if node is None:
        return {}

    if isinstance(node, dict):
        items = list(node.items())
    else:
        items = []
        for entry in _as_list(node, what=RBAC_KEY, project=scope.project):
            if not isinstance(entry, dict):
                raise TopologyParsingError(
                    message=f"Invalid rbac entry in project '{scope.project}': {entry!r}",
                    details={"key": RBAC_KEY, "project": scope.project},
                )
            items.extend(entry.items())

    roles: Dict[str, List[str]] = {}
    for role, principals in items:
        values = roles.setdefault(str(role), [])
        for p in _as_list(principals, what=f"{RBAC_KEY}.{role}", project=scope.project):
            values.append(_principal(p, role=f"rbac {role}", scope=scope))
    return roles


def _parse_topic(entry: Any, scope: _ProjectScope) -> Topic:
    if not isinstance(entry, dict) or entry.get(NAME_KEY) is None:
        raise MissingRequiredKeyError(
            message=f"'{NAME_KEY}' is missing for a topic of project: {scope.project}",
            details=topology_missing_key(missing_keys=[NAME_KEY], project=scope.project).details,
        )

    config = entry.get("config") or {}
    if not isinstance(config, dict):
        raise TopologyParsingError(
            message=f"Topic '{entry[NAME_KEY]}' config must be a map (project: {scope.project})",
            details={"topic": entry[NAME_KEY], "project": scope.project},
        )

    partitions = _parse_count(entry, "partitions", config, "num.partitions", scope)
    replication = _parse_count(entry, "replication_factor", config, "replication.factor", scope)

    return Topic(
        name=str(entry[NAME_KEY]),
        data_type=entry.get("dataType", entry.get("data_type")),
        config={str(k): str(v) for k, v in config.items()},
        partitions=partitions,
        replication_factor=replication,
    )


def _parse_count(
    entry: Dict[str, Any],
    key: str,
    config: Dict[str, Any],
    config_key: str,
    scope: _ProjectScope,
) -> Optional[int]:
    """Inteiro declarado no tópico (ou na sua config); bool e frações são rejeitados."""
    used_key = key if key in entry else config_key
    value = entry[key] if key in entry else config.get(config_key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and re.fullmatch(r"[0-9]+", value.strip()):
        return int(value.strip())

    topic = entry[NAME_KEY]
    raise TopologyParsingError(
        message=(
            f"Topic '{topic}' has an invalid value for '{used_key}': {value!r}, "
            f"an integer is expected (project: {scope.project})"
        ),
        details={"topic": topic, "project": scope.project, "key": used_key, "value": value},
    )


def _parse_project(node: Any, topology: Topology, server_aliases: Set[str]) -> Project:
    if not isinstance(node, dict) or node.get(NAME_KEY) is None:
        raise MissingRequiredKeyError(
            message=f"'{NAME_KEY}' is missing for a project, this is a required field.",
            details=topology_missing_key(missing_keys=[NAME_KEY]).details,
        )

    name = str(node[NAME_KEY])
    scope = _ProjectScope(project=name, server_aliases=server_aliases)

    systems: Dict[Role, PlatformSystem] = {}
    for role in Role:
        ps = ROLE_PARSERS[role](node.get(role.value), scope)
        if ps is not None:
            systems[role] = ps

    project = Project(
        name=name,
        systems=systems,
        rbac=_parse_rbac(node.get(RBAC_KEY), scope),
        separator=topology.separator,
    )
    project.decorate(context=topology.full_context(), order=topology.next_order())

    if node.get(TOPICS_KEY) is None:
        payload = topology_missing_key(missing_keys=[TOPICS_KEY], project=name)
        raise MissingRequiredKeyError(
            message=f"{TOPICS_KEY} is missing for project: {name}, this is a required field.",
            details=payload.details,
            hint=payload.hint,
        )

    for entry in _as_list(node[TOPICS_KEY], what=TOPICS_KEY, project=name):
        project.add_topic(_parse_topic(entry, scope))

    return project


def validate_topic_name(name: str) -> None:
    """Valida o charset de um nome completo de tópico."""
    if not TOPIC_NAME_PATTERN.fullmatch(name):
        payload = topology_invalid_topic_name(name=name, allowed=VALID_TOPIC_CHARACTERS)
        raise InvalidTopicNameError(
            message=(
                f'Topic name "{name}" is illegal, it contains a character other than '
                f"{VALID_TOPIC_CHARACTERS}"
            ),
            details=payload.details,
            hint=payload.hint,
        )


# ---------------------------------------------------------------------------
# API pública
# ---------------------------------------------------------------------------

def parse_topology(document: Dict[str, Any], config: Optional[Dict[str, Any]] = None) -> Topology:
    """
    Constrói uma `Topology` validada a partir de um documento hierárquico.

    Args:
        document (Dict[str, Any]): Documento de topologia já desserializado.
        config (Optional[Dict[str, Any]]): Configuração efetiva do reconciliador
            (aliases de servidores Connect, separador de nomes).

    Returns:
        Topology: Estado desejado tipado.

    Raises:
        MissingRequiredKeyError: `context`/`projects` ausentes, projeto sem `name`
            ou sem `topics`.
        ArtefactValidationError: Artefato sem path/name/server_label ou com alias
            não declarado.
        InvalidTopicNameError: Nome completo de tópico fora do charset permitido.
        TopologyParsingError: Demais violações estruturais.
    """
    if not isinstance(document, dict):
        raise TopologyParsingError(
            message=f"Topology document root must be a map, got {type(document).__name__}",
            details={"root_type": type(document).__name__},
        )

    missing = [k for k in (CONTEXT_KEY, PROJECTS_KEY) if document.get(k) is None]
    if missing:
        payload = topology_missing_key(missing_keys=missing)
        raise MissingRequiredKeyError(
            message=f"Missing required key(s) in topology: {', '.join(missing)}",
            details=payload.details,
            hint=payload.hint,
        )

    separator = topic_separator(config)
    server_aliases = kafka_connect_server_aliases(config)

    try:
        topology = Topology(context=str(document[CONTEXT_KEY]), separator=separator)
    except ValueError as e:
        raise TopologyParsingError(
            message=str(e),
            details={"key": CONTEXT_KEY},
        ) from e

    for key, value in document.items():
        if key not in (CONTEXT_KEY, PROJECTS_KEY, PLATFORM_KEY):
            topology.add_other(key, scalar_text(value) if is_scalar(value) else value)

    topology.platform = _parse_platform(document.get(PLATFORM_KEY))

    for node in _as_list(document[PROJECTS_KEY], what=PROJECTS_KEY):
        project = _parse_project(node, topology, server_aliases)
        logger.debug("Adding project %s to the Topology %s", project.name, topology.context)
        topology.add_project(project)

    for name in topology.topic_names():
        validate_topic_name(name)

    return topology


def load_topology(
    path: Union[str, Path], config: Optional[Dict[str, Any]] = None
) -> Topology:
    """Lê um documento YAML/JSON do disco e delega para `parse_topology`."""
    return parse_topology(read_structured_file(path), config)
