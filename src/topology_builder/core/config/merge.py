"""
Deep-merge da configuração do reconciliador.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

O merge é puramente funcional: nenhum input é mutado e a mesma entrada
produz sempre a mesma saída.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override`, retornando um novo dicionário.

    Chaves ausentes no override são preservadas da base. Um override
    `None` para uma chave existente é tratado como conflito de tipo,
    exceto quando a base também é `None`.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults embutidos).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Configuração resultante.

    Raises:
        ConfigTypeConflictError: Se base e override divergirem de tipo na mesma chave.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    merged: Dict[str, Any] = deepcopy(base)

    for key, value in override.items():
        if key not in merged:
            merged[key] = deepcopy(value)
            continue

        current = merged[key]

        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, list):
            merged[key] = deepcopy(value)
        elif type(current) is not type(value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )
        else:
            merged[key] = deepcopy(value)

    return merged
