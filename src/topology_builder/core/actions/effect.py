"""
Descritor de efeito das Actions.

Toda Action declara, de forma explícita, o efeito que sua execução bem
sucedida tem sobre o estado reconciliado: tipo de alvo, operação e payload.
O plano de execução despacha sobre este descritor em vez de inspecionar
o tipo concreto da Action.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class TargetKind(str, Enum):
    TOPIC = "topic"
    BINDING = "binding"
    SERVICE_ACCOUNT = "service_account"
    ARTEFACT = "artefact"


class Operation(str, Enum):
    CREATE = "create"
    DELETE = "delete"


@dataclass(frozen=True)
class Effect:
    """
    Efeito de uma Action sobre o estado reconciliado.

    Payload por alvo:
        - TOPIC           → nomes completos de tópicos
        - BINDING         → TopologyAclBinding
        - SERVICE_ACCOUNT → ServiceAccount
        - ARTEFACT        → KafkaConnectArtefact (exatamente um)
    """

    target: TargetKind
    operation: Operation
    payload: Tuple[Any, ...] = ()

    @property
    def key(self) -> Tuple[TargetKind, Operation]:
        return (self.target, self.operation)
