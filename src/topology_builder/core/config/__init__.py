# src/topology_builder/core/config/__init__.py

"""
Camada de configuração do Topology Builder.

Responsável por carregar, mesclar, identificar (hash) e expor de forma
tipada a configuração do reconciliador.

Princípios fundamentais:
    - Configuração é declarativa e determinística
    - Overrides são sempre explícitos
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não contém credenciais nem configuração de conexão com o cluster
    - Não valida o documento de topologia
"""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, compute_hash
from .loader import (
    DEFAULT_CONFIG,
    backend_settings,
    kafka_connect_server_aliases,
    load_config,
    read_structured_file,
    topic_separator,
)
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "InvalidConfigValueError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "compute_hash",
    "DEFAULT_CONFIG",
    "backend_settings",
    "kafka_connect_server_aliases",
    "load_config",
    "read_structured_file",
    "topic_separator",
    "deep_merge",
]
