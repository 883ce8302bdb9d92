"""
Membros (principals) atribuídos a cada papel funcional de um projeto.

Cada papel possui um tipo próprio, com o principal obrigatório e campos
específicos do papel. Todos os tipos são imutáveis e comparáveis por valor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class User:
    principal: str


@dataclass(frozen=True)
class Consumer(User):
    group: Optional[str] = None


@dataclass(frozen=True)
class Producer(User):
    transactional_id: Optional[str] = None
    idempotence: bool = False


@dataclass(frozen=True)
class KStream(User):
    application_id: Optional[str] = None
    read_topics: Tuple[str, ...] = ()
    write_topics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Connector(User):
    connectors: Tuple[str, ...] = ()
    read_topics: Tuple[str, ...] = ()
    write_topics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Schemas(User):
    subjects: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PlatformInstance(User):
    """Instância de um componente de plataforma (kafka, schema registry, ...)."""

    app_id: Optional[str] = None
