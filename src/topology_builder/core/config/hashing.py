"""
Hashing canônico de estruturas serializáveis.

Usado para identificar a configuração efetiva de um run e para verificar
a integridade do estado persistido pelo FileBackend.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 hexadecimal
"""

import hashlib
import json
from typing import Any, Dict


def canonical_json(data: Any) -> str:
    """Serializa `data` de forma estável (independe da ordem original das chaves)."""
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def compute_hash(data: Any) -> str:
    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash determinístico da configuração efetiva.

    Configurações estruturalmente equivalentes produzem o mesmo hash,
    independentemente da ordem das chaves.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return compute_hash(config)
