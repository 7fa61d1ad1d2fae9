"""Client for the external comment (text-generation) service.

The service is a black box: POST a small JSON payload about the entry
that was just logged, get back one comment string.

    POST /generate_sleep_comment     {date, sleep_hours}
         -> {"sleep_comment": "..."}
    POST /generate_exercise_comment  {date, activity_type, duration_minutes, quick_note}
         -> {"exercise_comment": "..."}

Failures raise :class:`ServiceUnavailable`.  Callers that must not block
use :func:`comment_or_fallback`, which substitutes fixed text and a
user-visible notice instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Awaitable

import httpx

from wellboard.config import Settings
from wellboard.errors import ServiceUnavailable

logger = logging.getLogger(__name__)

FALLBACK_COMMENT = "Unable to generate a comment at this time."
FALLBACK_NOTICE = "Failed to generate a comment. Please ensure the comment service is running."

SLEEP_ENDPOINT = "/generate_sleep_comment"
EXERCISE_ENDPOINT = "/generate_exercise_comment"


@dataclass(frozen=True)
class CommentResult:
    """A comment, and the notice to show if it is the fallback."""

    text: str
    fallback: bool = False
    notice: str | None = None


class CommentClient:
    """Async HTTP client for the comment service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize CommentClient.

        Args:
            base_url: Service root, e.g. ``http://localhost:8000``
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CommentClient":
        return cls(settings.COMMENT_SERVICE_URL, settings.COMMENT_TIMEOUT_SECONDS)

    async def _post(self, endpoint: str, payload: dict[str, Any], key: str) -> str:
        url = f"{self._base_url}{endpoint}"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.post(url, json=payload)
        except httpx.RequestError as e:
            logger.error(f"Comment service request error: {e}")
            raise ServiceUnavailable(url, str(e)) from e

        if not response.is_success:
            logger.error(f"Comment service error: {response.status_code}")
            raise ServiceUnavailable(url, "non-2xx response", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceUnavailable(url, "response is not JSON") from e

        comment = data.get(key) if isinstance(data, dict) else None
        if not isinstance(comment, str):
            raise ServiceUnavailable(url, f"response has no {key!r} string")
        return comment

    async def sleep_comment(self, duration_minutes: float, day: date | None = None) -> str:
        """Comment on a night of sleep."""
        day = day or date.today()
        payload = {
            "date": day.isoformat(),
            "sleep_hours": duration_minutes / 60,
        }
        return await self._post(SLEEP_ENDPOINT, payload, "sleep_comment")

    async def exercise_comment(
        self,
        activity_type: str,
        duration_minutes: float,
        quick_note: str = "",
        when: datetime | None = None,
    ) -> str:
        """Comment on a workout."""
        when = when or datetime.now()
        payload = {
            "date": when.isoformat(),
            "activity_type": activity_type,
            "duration_minutes": duration_minutes,
            "quick_note": quick_note,
        }
        return await self._post(EXERCISE_ENDPOINT, payload, "exercise_comment")


async def comment_or_fallback(request: Awaitable[str]) -> CommentResult:
    """Await a comment request, substituting the fallback on failure."""
    try:
        text = await request
    except ServiceUnavailable as e:
        logger.warning(f"Using fallback comment: {e}")
        return CommentResult(text=FALLBACK_COMMENT, fallback=True, notice=FALLBACK_NOTICE)
    return CommentResult(text=text)
