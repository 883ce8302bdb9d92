# src/topology_builder/core/config/loader.py
"""
Loader de configuração do Topology Builder.

A configuração efetiva do reconciliador é resolvida a partir de:
    - defaults embutidos (`DEFAULT_CONFIG`)
    - um arquivo de defaults do operador (obrigatório)
    - um arquivo local de overrides (opcional)

Além do carregamento, este módulo expõe accessors tipados para as chaves
que o core consome:
    - `platform.kafka_connect.servers` → aliases válidos para artefatos
    - `topology.separator`             → separador dos nomes qualificados
    - `backend`                        → seleção do BackendController

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não lida com credenciais ou conexões com o cluster
    - Não valida o documento de topologia (responsabilidade do parser)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Set, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)


DEFAULT_CONFIG: Dict[str, Any] = {
    "topology": {"separator": "."},
    "platform": {"kafka_connect": {"servers": {}}},
    "backend": {"type": "file", "path": ".cluster-state.json"},
}


def read_structured_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Lê um arquivo YAML ou JSON e valida que o root é um dicionário.

    Utilizado tanto para arquivos de configuração quanto para documentos
    de topologia.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Args:
        path (Union[str, Path]): Caminho do arquivo.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do reconciliador.

    Política de resolução:
        - `DEFAULT_CONFIG` é sempre a base
        - O arquivo de defaults é obrigatório e aplicado sobre a base
        - O arquivo local, se existir, tem prioridade sobre ambos

    Raises:
        ConfigFileNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    effective = deep_merge(DEFAULT_CONFIG, read_structured_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, read_structured_file(local_file))

    return effective


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------

def _section(config: Optional[Dict[str, Any]], *keys: str) -> Any:
    node: Any = config or {}
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def kafka_connect_server_aliases(config: Optional[Dict[str, Any]]) -> Set[str]:
    """Aliases declarados em `platform.kafka_connect.servers` (vazio se ausente)."""
    servers = _section(config, "platform", "kafka_connect", "servers")
    if servers is None:
        return set()
    if not isinstance(servers, dict):
        raise InvalidConfigValueError(
            "platform.kafka_connect.servers deve ser um mapa alias -> url, "
            f"recebido: {type(servers).__name__}"
        )
    return {str(alias) for alias in servers}


def topic_separator(config: Optional[Dict[str, Any]]) -> str:
    separator = _section(config, "topology", "separator")
    if separator is None:
        return DEFAULT_CONFIG["topology"]["separator"]
    if not isinstance(separator, str) or not separator:
        raise InvalidConfigValueError("topology.separator deve ser uma string não vazia")
    return separator


def backend_settings(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    backend = _section(config, "backend")
    if backend is None:
        return dict(DEFAULT_CONFIG["backend"])
    if not isinstance(backend, dict):
        raise InvalidConfigValueError("backend deve ser um mapa")
    return deep_merge(DEFAULT_CONFIG["backend"], backend)
