"""
Artefatos gerenciados em subsistemas da plataforma.

Um artefato é endereçado por (server_label, name, path). No v1 apenas
artefatos de Kafka Connect são gerenciados.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class KafkaConnectArtefact:
    """
    Artefato de Kafka Connect (ex.: definição de um connector).

    Campos:
        - server_label: alias do servidor Connect declarado na configuração
        - name: nome do connector
        - path: caminho do arquivo de definição

    Igualdade e hash consideram os três campos.
    """

    server_label: str
    name: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"server_label": self.server_label, "name": self.name, "path": self.path}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KafkaConnectArtefact":
        return cls(
            server_label=str(data["server_label"]),
            name=str(data["name"]),
            path=str(data["path"]),
        )

    def __str__(self) -> str:
        return f"{self.server_label}/{self.name} ({self.path})"
