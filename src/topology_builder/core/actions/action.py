# src/topology_builder/core/actions/action.py
"""
Contrato canônico de Action e suas variantes.

Uma Action é a unidade efêmera de mudança aplicada pelo plano de execução.
Ela nunca é persistida; apenas seu efeito, quando a execução é bem
sucedida, é incorporado ao estado reconciliado.

Responsabilidades de uma Action:
    - executar o efeito externo via um provider (`run`)
    - declarar o efeito sobre o estado (`effect`)
    - expor os bindings afetados (`bindings`, possivelmente vazio)
    - descrever-se em uma única linha (`__str__`), usada em preview e logs

Vocabulário fechado (v1):
    - SyncTopicAction / DeleteTopicsAction
    - CreateBindingsAction / ClearBindingsAction
    - CreateAccountsAction / ClearAccountsAction
    - CreateArtefactAction / DeleteArtefactAction

Limites explícitos:
    - Actions não conhecem o plano nem o backend
    - Actions não fazem retry: falhas são encapsuladas e propagadas
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from topology_builder.core.exceptions import ActionExecutionError, TopologyException
from topology_builder.core.model.artefact import KafkaConnectArtefact
from topology_builder.core.model.state import ServiceAccount, TopologyAclBinding
from topology_builder.core.model.topology import Topic

from .effect import Effect, Operation, TargetKind
from .providers import AccessControlProvider, AccountProvider, ArtefactProvider, TopicProvider


@runtime_checkable
class Action(Protocol):
    """
    Contrato mínimo que o ExecutionPlan consome.

    Conformidade é estrutural (duck typing), como no resto do core:
    qualquer objeto com estes membros pode ser adicionado a um plano.
    """

    @property
    def effect(self) -> Effect:
        ...

    @property
    def bindings(self) -> Tuple[TopologyAclBinding, ...]:
        ...

    def run(self) -> None:
        """Aplica o efeito externo; falha com erro descritivo."""
        ...


class BaseAction(ABC):
    """Implementação base: encapsula falhas do provider em ActionExecutionError."""

    name = "Action"

    @abstractmethod
    def _apply(self) -> None:
        ...

    def _props(self) -> Dict[str, Any]:
        return {}

    @property
    @abstractmethod
    def effect(self) -> Effect:
        ...

    @property
    def bindings(self) -> Tuple[TopologyAclBinding, ...]:
        return ()

    def run(self) -> None:
        try:
            self._apply()
        except TopologyException:
            raise
        except Exception as e:
            raise ActionExecutionError(
                message=f"{self} failed: {e}",
                details={
                    "action": str(self),
                    "exc_type": e.__class__.__name__,
                    "exc_message": str(e),
                },
                hint="Verifique a conectividade e as permissões do provider e recalcule o plano.",
            ) from e

    def __str__(self) -> str:
        props = ", ".join(f"{k}={v}" for k, v in self._props().items())
        return f"{self.name} {{{props}}}" if props else self.name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self}>"


# ---------------------------------------------------------------------------
# Topics
# ---------------------------------------------------------------------------

class SyncTopicAction(BaseAction):
    """Cria o tópico ou atualiza sua configuração."""

    name = "SyncTopic"

    def __init__(self, provider: TopicProvider, topic: str, config: Optional[Dict[str, str]] = None):
        self.provider = provider
        self.topic = topic
        self.config: Dict[str, str] = dict(config or {})

    @classmethod
    def for_topic(cls, provider: TopicProvider, topic: Topic) -> "SyncTopicAction":
        config = dict(topic.config)
        if topic.partitions is not None:
            config.setdefault("num.partitions", str(topic.partitions))
        if topic.replication_factor is not None:
            config.setdefault("replication.factor", str(topic.replication_factor))
        return cls(provider, topic.full_name(), config)

    def _apply(self) -> None:
        self.provider.create_or_update_topic(self.topic, dict(self.config))

    def _props(self) -> Dict[str, Any]:
        props: Dict[str, Any] = {"topic": self.topic}
        if self.config:
            props["config"] = ",".join(f"{k}:{v}" for k, v in sorted(self.config.items()))
        return props

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.TOPIC, Operation.CREATE, (self.topic,))


class DeleteTopicsAction(BaseAction):
    name = "DeleteTopics"

    def __init__(self, provider: TopicProvider, topics: Iterable[str]):
        self.provider = provider
        self.topics: List[str] = list(topics)

    def _apply(self) -> None:
        self.provider.delete_topics(list(self.topics))

    def _props(self) -> Dict[str, Any]:
        return {"topics": ",".join(self.topics)}

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.TOPIC, Operation.DELETE, tuple(self.topics))


# ---------------------------------------------------------------------------
# Bindings
# ---------------------------------------------------------------------------

class CreateBindingsAction(BaseAction):
    name = "CreateBindings"

    def __init__(self, provider: AccessControlProvider, bindings: Iterable[TopologyAclBinding]):
        self.provider = provider
        self._bindings: Tuple[TopologyAclBinding, ...] = tuple(bindings)

    def _apply(self) -> None:
        self.provider.create_bindings(list(self._bindings))

    def _props(self) -> Dict[str, Any]:
        return {"bindings": "; ".join(f"[{b}]" for b in self._bindings)}

    @property
    def bindings(self) -> Tuple[TopologyAclBinding, ...]:
        return self._bindings

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.BINDING, Operation.CREATE, self._bindings)


class ClearBindingsAction(CreateBindingsAction):
    name = "ClearBindings"

    def _apply(self) -> None:
        self.provider.clear_bindings(list(self._bindings))

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.BINDING, Operation.DELETE, self._bindings)


# ---------------------------------------------------------------------------
# Service accounts
# ---------------------------------------------------------------------------

class CreateAccountsAction(BaseAction):
    name = "CreateAccounts"

    def __init__(self, provider: AccountProvider, principals: Iterable[ServiceAccount]):
        self.provider = provider
        self.principals: Tuple[ServiceAccount, ...] = tuple(principals)

    def _apply(self) -> None:
        self.provider.create_accounts(list(self.principals))

    def _props(self) -> Dict[str, Any]:
        return {"principals": ",".join(sa.principal for sa in self.principals)}

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.SERVICE_ACCOUNT, Operation.CREATE, self.principals)


class ClearAccountsAction(CreateAccountsAction):
    name = "ClearAccounts"

    def _apply(self) -> None:
        self.provider.clear_accounts(list(self.principals))

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.SERVICE_ACCOUNT, Operation.DELETE, self.principals)


# ---------------------------------------------------------------------------
# Artefacts
# ---------------------------------------------------------------------------

class CreateArtefactAction(BaseAction):
    name = "CreateArtefact"

    def __init__(self, provider: ArtefactProvider, artefact: KafkaConnectArtefact):
        self.provider = provider
        self.artefact = artefact

    def _apply(self) -> None:
        self.provider.create_artefact(self.artefact)

    def _props(self) -> Dict[str, Any]:
        return {
            "server": self.artefact.server_label,
            "name": self.artefact.name,
            "path": self.artefact.path,
        }

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.ARTEFACT, Operation.CREATE, (self.artefact,))


class DeleteArtefactAction(CreateArtefactAction):
    name = "DeleteArtefact"

    def _apply(self) -> None:
        self.provider.delete_artefact(self.artefact)

    @property
    def effect(self) -> Effect:
        return Effect(TargetKind.ARTEFACT, Operation.DELETE, (self.artefact,))
