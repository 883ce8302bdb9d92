"""
Topology Builder — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do core do Topology Builder.

Objetivo:
- Permitir que parser, actions, backend e plano levantem falhas semânticas tipadas
- Facilitar o mapeamento determinístico para TopologyErrorPayload
- Evitar ValueError/RuntimeError genéricos em validações críticas

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Nenhuma exceção é engolida pelo core: toda falha aborta a operação corrente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class TopologyException(Exception):
    """Base class para exceções internas do Topology Builder.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta, humana e nomear a entidade ofensora
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Parsing da topologia
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class TopologyParsingError(TopologyException):
    """Documento de topologia estruturalmente ou semanticamente inválido."""


@dataclass(eq=False)
class MissingRequiredKeyError(TopologyParsingError):
    """Chave obrigatória ausente (context, projects, topics, name)."""


@dataclass(eq=False)
class ArtefactValidationError(TopologyParsingError):
    """Artefato sem campo obrigatório ou referenciando alias de servidor inexistente."""


@dataclass(eq=False)
class InvalidTopicNameError(TopologyParsingError):
    """Nome completo de tópico contém caracteres fora do charset permitido."""


# ---------------------------------------------------------------------------
# Execução / Backend
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ActionExecutionError(TopologyException):
    """Efeito externo de uma Action falhou."""


@dataclass(eq=False)
class BackendIOError(TopologyException):
    """Falha de leitura/escrita do estado persistido."""
