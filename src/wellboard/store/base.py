"""Read boundary of the append-only log store.

The engine never writes.  It only asks for the most recent *limit*
documents of one category for one user, newest first by the category's
order field.  The user id is passed explicitly on every read.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from wellboard.records import Category

RawDocument = dict[str, Any]


class LogStore(ABC):
    """Abstract log store reader."""

    @abstractmethod
    async def fetch(self, category: Category, user_id: str, limit: int) -> list[RawDocument]:
        """Return up to *limit* most recent raw documents, newest first.

        Raises:
            StoreUnavailable: on transport, auth, or driver errors.
        """

    async def close(self) -> None:
        """Release any connection held by the store."""
