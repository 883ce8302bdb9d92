"""
Persistência do estado reconciliado (Backend Controller).
"""

from .controller import (
    STATE_FORMAT_VERSION,
    BackendController,
    FileBackend,
    InMemoryBackend,
    build_backend,
)

__all__ = [
    "STATE_FORMAT_VERSION",
    "BackendController",
    "FileBackend",
    "InMemoryBackend",
    "build_backend",
]
