"""
Contexto de execução de um plano.

O `RunContext` identifica um run (run_id, created_at), carrega a
configuração efetiva e acumula o log estruturado de eventos do plano.

Invariantes:
    - Cada run possui seu próprio contexto
    - Eventos são anexados na ordem em que ocorrem e incluem `run_id`
    - Timestamps são sempre UTC

Limites explícitos:
    - Não executa actions
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from topology_builder.core.config.hashing import compute_config_hash


@dataclass
class RunContext:
    run_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    @classmethod
    def new(cls, config: Optional[Dict[str, Any]] = None, **meta: Any) -> "RunContext":
        """Novo contexto; com config, `meta["config_hash"]` identifica a configuração efetiva."""
        config = dict(config or {})
        meta = dict(meta)
        if config:
            meta.setdefault("config_hash", compute_config_hash(config))
        return cls(
            run_id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=config,
            meta=meta,
        )

    def log(self, *, action: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "action": action,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def events_at(self, level: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["level"] == level]
