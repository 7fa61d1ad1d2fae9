"""Log store readers."""

from wellboard.store.base import LogStore, RawDocument
from wellboard.store.memory import MemoryLogStore
from wellboard.store.mongo import MongoLogStore

__all__ = [
    "LogStore",
    "RawDocument",
    "MemoryLogStore",
    "MongoLogStore",
]
