"""
Plano de execução do Topology Builder.

- context        → RunContext (identidade do run + log estruturado de eventos)
- execution_plan → ExecutionPlan (apply/dry run + commit no backend)
"""

from .context import RunContext
from .execution_plan import FOLD, ExecutionPlan, PlanRunResult

__all__ = ["RunContext", "FOLD", "ExecutionPlan", "PlanRunResult"]
