# src/topology_builder/core/backend/controller.py
"""
Backend Controller: estado persistido do último apply.

O BackendController é o registro oficial do estado reconciliado entre
execuções. Ele é lido uma única vez no início do plano (`load`) e
substituído por completo ao final de um apply bem sucedido
(`reset` + `add_*` + `flush_and_close`).

Decisões arquiteturais:
    - Nunca há atualização parcial no meio de um run
    - Um único writer por run; não há suporte a escrita concorrente
    - Falhas de I/O são encapsuladas em BackendIOError e propagadas

Implementações (v1):
    - InMemoryBackend → testes e previews
    - FileBackend     → JSON determinístico em disco, com hash de integridade
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set, Union

from topology_builder.core.config.errors import InvalidConfigValueError
from topology_builder.core.config.hashing import compute_hash
from topology_builder.core.config.loader import backend_settings
from topology_builder.core.errors import BACKEND_IO_ERROR
from topology_builder.core.exceptions import BackendIOError
from topology_builder.core.model.artefact import KafkaConnectArtefact
from topology_builder.core.model.state import ReconciledState, ServiceAccount, TopologyAclBinding


logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = 1


class BackendController(ABC):
    """
    Contrato do armazenamento de estado consumido pelo ExecutionPlan.

    Subclasses mantêm um `ReconciledState` de trabalho em `_state` e
    implementam apenas `load` e `flush_and_close`.
    """

    def __init__(self) -> None:
        self._state = ReconciledState()

    @abstractmethod
    def load(self) -> None:
        """Carrega o snapshot persistido; falha em armazenamento ilegível/corrompido."""

    @abstractmethod
    def flush_and_close(self) -> None:
        """Persiste o estado atual por completo; falha em erro de escrita."""

    def size(self) -> int:
        return self._state.size()

    def bindings(self) -> Set[TopologyAclBinding]:
        return set(self._state.bindings)

    def service_accounts(self) -> Set[ServiceAccount]:
        return set(self._state.service_accounts)

    def topics(self) -> Set[str]:
        return set(self._state.topics)

    def connectors(self) -> Set[KafkaConnectArtefact]:
        return set(self._state.artefacts)

    def snapshot(self) -> ReconciledState:
        return self._state.copy()

    def reset(self) -> None:
        self._state = ReconciledState()

    def add_bindings(self, bindings: Iterable[TopologyAclBinding]) -> None:
        self._state.add_bindings(bindings)

    def add_service_accounts(self, accounts: Iterable[ServiceAccount]) -> None:
        self._state.add_accounts(accounts)

    def add_topics(self, topics: Iterable[str]) -> None:
        for t in topics:
            self._state.add_topic(t)

    def add_connectors(self, connectors: Iterable[KafkaConnectArtefact]) -> None:
        for c in connectors:
            self._state.add_artefact(c)


class InMemoryBackend(BackendController):
    """Backend volátil; `persisted` representa o último commit."""

    def __init__(self, state: Optional[ReconciledState] = None) -> None:
        super().__init__()
        self.persisted: ReconciledState = state.copy() if state is not None else ReconciledState()
        self.load_count = 0
        self.flush_count = 0

    def load(self) -> None:
        self._state = self.persisted.copy()
        self.load_count += 1

    def flush_and_close(self) -> None:
        self.persisted = self._state.copy()
        self.flush_count += 1


class FileBackend(BackendController):
    """
    Backend em arquivo JSON.

    Formato (v1):
        {"version": 1, "state_hash": "<sha256>", "state": {...}}

    O `state_hash` segue a mesma política canônica do hash de configuração.
    Arquivo ausente equivale a estado vazio (primeiro run).
    """

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)

    def _io_error(self, message: str, exc: BaseException) -> BackendIOError:
        return BackendIOError(
            message=message,
            details={
                "type": BACKEND_IO_ERROR,
                "path": str(self.path),
                "exc_type": exc.__class__.__name__,
                "exc_message": str(exc),
            },
            hint="Verifique permissões e integridade do arquivo de estado.",
        )

    def load(self) -> None:
        if not self.path.exists():
            logger.debug("State file %s not found, starting from an empty state", self.path)
            self._state = ReconciledState()
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise self._io_error(f"Unable to read state file {self.path}", e) from e

        try:
            state_data: Dict[str, Any] = data["state"]
            expected = data["state_hash"]
            state = ReconciledState.from_dict(state_data)
        except (KeyError, TypeError, AttributeError) as e:
            raise self._io_error(f"Corrupted state file {self.path}", e) from e

        actual = compute_hash(state_data)
        if actual != expected:
            raise BackendIOError(
                message=f"Corrupted state file {self.path}: state hash mismatch",
                details={
                    "type": BACKEND_IO_ERROR,
                    "path": str(self.path),
                    "expected_hash": expected,
                    "actual_hash": actual,
                },
                hint="Restaure o arquivo de estado ou remova-o e reconcilie a partir do cluster.",
            )

        self._state = state

    def flush_and_close(self) -> None:
        state_data = self._state.to_dict()
        payload = {
            "version": STATE_FORMAT_VERSION,
            "state_hash": compute_hash(state_data),
            "state": state_data,
        }
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True),
                encoding="utf-8",
            )
            os.replace(tmp, self.path)
        except OSError as e:
            raise self._io_error(f"Unable to write state file {self.path}", e) from e


def build_backend(config: Optional[Dict[str, Any]]) -> BackendController:
    """Instancia o backend declarado em `backend.type` (file | memory)."""
    settings = backend_settings(config)
    kind = settings.get("type")
    if kind == "file":
        return FileBackend(settings["path"])
    if kind == "memory":
        return InMemoryBackend()
    raise InvalidConfigValueError(f"Unsupported backend type: {kind!r} (expected 'file' or 'memory')")
