"""
Actions do Topology Builder.

- effect    → descritor fechado (TargetKind × Operation + payload)
- providers → protocolos dos colaboradores externos
- action    → protocolo Action e variantes concretas
"""

from .action import (
    Action,
    BaseAction,
    ClearAccountsAction,
    ClearBindingsAction,
    CreateAccountsAction,
    CreateArtefactAction,
    CreateBindingsAction,
    DeleteArtefactAction,
    DeleteTopicsAction,
    SyncTopicAction,
)
from .effect import Effect, Operation, TargetKind
from .providers import AccessControlProvider, AccountProvider, ArtefactProvider, TopicProvider

__all__ = [
    "Action",
    "BaseAction",
    "ClearAccountsAction",
    "ClearBindingsAction",
    "CreateAccountsAction",
    "CreateArtefactAction",
    "CreateBindingsAction",
    "DeleteArtefactAction",
    "DeleteTopicsAction",
    "SyncTopicAction",
    "Effect",
    "Operation",
    "TargetKind",
    "AccessControlProvider",
    "AccountProvider",
    "ArtefactProvider",
    "TopicProvider",
]
