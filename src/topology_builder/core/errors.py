"""
Topology Builder — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do Topology Builder.
Erros são artefatos de domínio e fazem parte do contrato operacional
do reconciliador, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma recuperação implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .exceptions import TopologyException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TopologyErrorPayload:
    """
    Payload canônico de erro do Topology Builder.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Parsing
TOPOLOGY_MISSING_KEY = "TOPOLOGY_MISSING_KEY"
TOPOLOGY_INVALID_ARTEFACT = "TOPOLOGY_INVALID_ARTEFACT"
TOPOLOGY_INVALID_TOPIC_NAME = "TOPOLOGY_INVALID_TOPIC_NAME"

# Execução
PLAN_EXECUTION_ERROR = "PLAN_EXECUTION_ERROR"

# Backend
BACKEND_IO_ERROR = "BACKEND_IO_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def topology_missing_key(
    *,
    missing_keys: List[str],
    project: Optional[str] = None,
    hint: str = "Declare as chaves obrigatórias no documento de topologia antes de reexecutar.",
) -> TopologyErrorPayload:
    return TopologyErrorPayload(
        type=TOPOLOGY_MISSING_KEY,
        message="Chave obrigatória ausente na topologia",
        details={"missing_keys": missing_keys, "project": project},
        hint=hint,
    )


def topology_invalid_artefact(
    *,
    artefact: Dict[str, Any],
    reason: str,
    allowed_labels: Optional[List[str]] = None,
    hint: str = "Ajuste o artefato ou declare o alias em platform.kafka_connect.servers na configuração.",
) -> TopologyErrorPayload:
    return TopologyErrorPayload(
        type=TOPOLOGY_INVALID_ARTEFACT,
        message="Artefato inválido na topologia",
        details={
            "artefact": artefact,
            "reason": reason,
            "allowed_labels": allowed_labels,
        },
        hint=hint,
    )


def topology_invalid_topic_name(
    *,
    name: str,
    allowed: str,
    hint: str = "Renomeie o tópico (ou o contexto/projeto) usando apenas o charset permitido.",
) -> TopologyErrorPayload:
    return TopologyErrorPayload(
        type=TOPOLOGY_INVALID_TOPIC_NAME,
        message="Nome de tópico ilegal",
        details={"name": name, "allowed": allowed},
        hint=hint,
    )


def plan_execution_error(
    *,
    action: str,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "O estado persistido não foi alterado. Recalcule o plano a partir de um diff novo antes de reaplicar.",
) -> TopologyErrorPayload:
    return TopologyErrorPayload(
        type=PLAN_EXECUTION_ERROR,
        message="Falha durante a execução de uma action do plano",
        details={
            "action": action,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def exception_to_error(exc: BaseException, *, action: Optional[str] = None) -> TopologyErrorPayload:
    """Converte exceções em TopologyErrorPayload (serializável, acionável).

    Regras:
    - TopologyException: já vem com message/details/hint; o código é o nome da classe.
    - Outras exceções: encapsular como PLAN_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, TopologyException):
        details = dict(exc.details or {})
        if action is not None:
            details.setdefault("action", action)
        return TopologyErrorPayload(
            type=exc.__class__.__name__,
            message=str(exc) or "Erro de execução",
            details=details,
            hint=exc.hint,
        )

    return plan_execution_error(
        action=action or "",
        exc_type=exc.__class__.__name__,
        exc_message=str(exc),
    )
