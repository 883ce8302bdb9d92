# src/topology_builder/__init__.py
"""
Topology Builder — reconciliador declarativo de infraestrutura para
plataformas de mensageria/streaming.

O operador descreve tópicos, bindings de ACL, service accounts e
artefatos gerenciados em um documento de topologia; o Topology Builder
constrói o estado desejado tipado, aplica (ou apenas descreve) as
actions planejadas e persiste o estado resultante para o próximo run.

Arquitetura em alto nível:
    - core.config  → carregamento, merge e hashing da configuração
    - core.model   → Resource Model e estado reconciliado
    - core.parser  → documento de topologia → Topology validada
    - core.actions → vocabulário fechado de actions e providers externos
    - core.backend → persistência do estado (BackendController)
    - core.plan    → execução ordenada de actions e commit do estado

Limites explícitos:
    - Não calcula diffs entre estado desejado e cluster
    - Não fala diretamente com o cluster (providers são externos)
    - Não contém CLI nem configuração de credenciais
"""

from .core.parser import load_topology, parse_topology
from .core.plan import ExecutionPlan, PlanRunResult

__all__ = ["load_topology", "parse_topology", "ExecutionPlan", "PlanRunResult"]
