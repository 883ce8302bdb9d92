# src/topology_builder/core/plan/execution_plan.py
"""
Plano de execução do Topology Builder.

O ExecutionPlan recebe uma lista ordenada de Actions produzida por um
differ externo e as executa (apply) ou apenas as descreve (dry run),
mantendo em memória o estado reconciliado resultante e, ao final de um
apply bem sucedido, substituindo o estado do BackendController.

Política de execução:
    - Actions executam estritamente na ordem da lista, uma por vez
    - Dry run: uma linha por action no sink de saída; sem mutação, sem commit
    - Apply: a primeira falha é logada e propagada; nenhuma action posterior
      executa, nenhum commit ocorre e os folds parciais são descartados
    - Um único commit por run, após o loop

Decisões arquiteturais:
    - O fold do efeito é despachado pelo descritor (TargetKind, Operation),
      com tabela exaustiva verificada na importação do módulo
    - A lista de actions é protegida por lock para permitir que o
      planejamento adicione actions concorrentemente
    - O engine nunca reordena, deduplica ou agrupa actions

Limites explícitos:
    - Não calcula diffs
    - Não faz retry: uma nova tentativa é um novo plano sobre um diff novo
    - Não é crash-safe: um apply interrompido pode deixar o cluster
      parcialmente alterado com o estado persistido defasado
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, TextIO, Tuple

from topology_builder.core.actions.action import Action
from topology_builder.core.actions.effect import Operation, TargetKind
from topology_builder.core.backend.controller import BackendController
from topology_builder.core.errors import exception_to_error
from topology_builder.core.model.artefact import KafkaConnectArtefact
from topology_builder.core.model.state import ReconciledState, ServiceAccount, TopologyAclBinding

from .context import RunContext


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Fold do efeito sobre o estado
# ---------------------------------------------------------------------------

def _create_topics(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    for name in payload:
        state.add_topic(name)


def _delete_topics(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    state.remove_topics(payload)


def _create_bindings(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    state.add_bindings(payload)


def _clear_bindings(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    state.remove_bindings(payload)


def _create_accounts(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    state.add_accounts(payload)


def _clear_accounts(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    state.remove_accounts(payload)


def _create_artefact(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    for artefact in payload:
        state.add_artefact(artefact)


def _delete_artefact(state: ReconciledState, payload: Tuple[Any, ...]) -> None:
    for artefact in payload:
        state.remove_artefact(artefact)


FOLD: Dict[Tuple[TargetKind, Operation], Callable[[ReconciledState, Tuple[Any, ...]], None]] = {
    (TargetKind.TOPIC, Operation.CREATE): _create_topics,
    (TargetKind.TOPIC, Operation.DELETE): _delete_topics,
    (TargetKind.BINDING, Operation.CREATE): _create_bindings,
    (TargetKind.BINDING, Operation.DELETE): _clear_bindings,
    (TargetKind.SERVICE_ACCOUNT, Operation.CREATE): _create_accounts,
    (TargetKind.SERVICE_ACCOUNT, Operation.DELETE): _clear_accounts,
    (TargetKind.ARTEFACT, Operation.CREATE): _create_artefact,
    (TargetKind.ARTEFACT, Operation.DELETE): _delete_artefact,
}

_missing = {(t, o) for t in TargetKind for o in Operation} - set(FOLD)
if _missing:  # pragma: no cover
    raise RuntimeError(f"FOLD table is missing effects: {sorted(_missing)}")


@dataclass(frozen=True)
class PlanRunResult:
    """Resultado agregado de um run do plano."""

    dry_run: bool
    executed: List[str] = field(default_factory=list)
    committed: bool = False


class ExecutionPlan:
    """Plano canônico: lista ordenada de Actions + estado reconciliado de trabalho."""

    def __init__(
        self,
        *,
        backend: BackendController,
        output: Optional[TextIO] = None,
        ctx: Optional[RunContext] = None,
    ):
        self.backend = backend
        self.output = output
        self.ctx: RunContext = ctx or RunContext.new()
        self._actions: List[Action] = []
        self._lock = threading.Lock()
        self.state = ReconciledState()
        if backend.size() > 0:
            self.state = backend.snapshot()

    @classmethod
    def init(
        cls,
        backend: BackendController,
        output: Optional[TextIO] = None,
        ctx: Optional[RunContext] = None,
    ) -> "ExecutionPlan":
        """Carrega o snapshot do backend e retorna um plano vazio semeado por ele.

        Raises:
            BackendIOError: Se o estado persistido não puder ser lido.
        """
        backend.load()
        return cls(backend=backend, output=output, ctx=ctx)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add(self, action: Action) -> None:
        with self._lock:
            self._actions.append(action)

    @property
    def actions(self) -> List[Action]:
        with self._lock:
            return list(self._actions)

    # ------------------------------------------------------------------
    # Estado de trabalho
    # ------------------------------------------------------------------

    @property
    def topics(self) -> Set[str]:
        return self.state.topics

    @property
    def bindings(self) -> Set[TopologyAclBinding]:
        return self.state.bindings

    @property
    def service_accounts(self) -> Set[ServiceAccount]:
        return self.state.service_accounts

    @property
    def connectors(self) -> Set[KafkaConnectArtefact]:
        return self.state.artefacts

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------

    def _sink(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    def _execute(self, action: Action, state: ReconciledState, dry_run: bool) -> None:
        description = str(action)
        logger.debug("Executing action %s (dry_run=%s)", description, dry_run)

        if dry_run:
            self._sink().write(description + "\n")
            return

        action.run()
        effect = action.effect
        FOLD[effect.key](state, effect.payload)
        self.ctx.log(action=description, level="INFO", message="action applied",
                     target=effect.target.value, operation=effect.operation.value)

    def _commit(self) -> None:
        self.backend.reset()
        self.backend.add_bindings(self.state.bindings)
        self.backend.add_service_accounts(self.state.service_accounts)
        self.backend.add_topics(self.state.topics)
        self.backend.add_connectors(self.state.artefacts)
        self.backend.flush_and_close()
        self.ctx.log(action=None, level="INFO", message="state committed",
                     size=self.state.size())

    def run(self, dry_run: bool = False) -> PlanRunResult:
        """
        Executa (ou descreve) as actions na ordem da lista.

        Args:
            dry_run (bool): Apenas descreve as actions no sink de saída.

        Returns:
            PlanRunResult: descrições das actions processadas e se houve commit.

        Raises:
            Exception: A primeira falha de action (original, sem encapsulamento
                adicional) ou falha de I/O do backend no commit.
        """
        executed: List[str] = []
        # o estado de trabalho só é adotado se todas as actions tiverem sucesso
        working = self.state.copy()

        for action in self.actions:
            try:
                self._execute(action, working, dry_run)
            except Exception as e:
                error = exception_to_error(e, action=str(action))
                logger.error("Something happened running action %s", action, exc_info=True)
                self.ctx.log(action=str(action), level="ERROR", message=error.message,
                             error=error.to_dict())
                raise
            executed.append(str(action))

        if dry_run:
            return PlanRunResult(dry_run=True, executed=executed, committed=False)

        self.state = working
        self._commit()
        return PlanRunResult(dry_run=False, executed=executed, committed=True)
