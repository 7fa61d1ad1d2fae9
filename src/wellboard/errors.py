"""Failure conditions raised by the wellboard adapters.

Nothing here is fatal to the process.  The orchestrator turns a
``StoreUnavailable`` into a stale view plus a notice, and the comment
client turns a ``ServiceUnavailable`` into fallback text plus a notice.
A single malformed record is never an exception: the decoders report it
as a drop reason (see :class:`wellboard.decoders.base.DecodeResult`).
"""

from __future__ import annotations


class WellboardError(Exception):
    """Base class for wellboard errors."""


class StoreUnavailable(WellboardError):
    """A log store read failed (transport, auth, or driver error)."""

    def __init__(self, category: str, user_id: str, reason: str = "") -> None:
        self.category = category
        self.user_id = user_id
        self.reason = reason
        msg = f"Log store unavailable for {category} (user {user_id})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ServiceUnavailable(WellboardError):
    """The text-generation service was unreachable or answered badly."""

    def __init__(self, endpoint: str, reason: str = "", status_code: int | None = None) -> None:
        self.endpoint = endpoint
        self.reason = reason
        self.status_code = status_code
        msg = f"Comment service unavailable at {endpoint}"
        if status_code is not None:
            msg += f" (HTTP {status_code})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
