"""Durable key-value backends and the store mirror."""

from mhimmo.persistence.adapter import PersistenceAdapter, build_backend, collection_key
from mhimmo.persistence.json_file import JsonFileBackend
from mhimmo.persistence.memory import MemoryBackend
from mhimmo.persistence.postgres import PostgresBackend

__all__ = [
    "JsonFileBackend",
    "MemoryBackend",
    "PersistenceAdapter",
    "PostgresBackend",
    "build_backend",
    "collection_key",
]
