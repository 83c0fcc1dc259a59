# campus_connect/client/refresh_coordinator.py
"""Single-flight refresh of the access token.

Requests that hit an expired access token all ask the coordinator for a new
one. The first caller performs the refresh; everyone arriving while it is in
flight is parked in a FIFO queue and resumed with the same result, so a burst
of N failing requests produces exactly one call to the refresh endpoint.

The coordinator lives on a single asyncio event loop. The guard is
checked-and-set before the first ``await``, which is what makes it safe
without a lock.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections import deque
from typing import Awaitable, Callable

from campus_connect.client.session_context import SessionContext

logger = logging.getLogger(__name__)

RefreshFn = Callable[[], Awaitable[str]]


class CoordinatorState(enum.Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshCoordinator:
    def __init__(self, refresh_fn: RefreshFn, session: SessionContext) -> None:
        self._refresh_fn = refresh_fn
        self._session = session
        self._is_refreshing = False
        self._pending: deque[asyncio.Future[str]] = deque()

    @property
    def state(self) -> CoordinatorState:
        return CoordinatorState.REFRESHING if self._is_refreshing else CoordinatorState.IDLE

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def obtain_token(self) -> str:
        """Devolve um access token novo, disparando no máximo um refresh por vez."""
        if self._is_refreshing:
            future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
            self._pending.append(future)
            return await future

        self._is_refreshing = True
        try:
            token = await self._refresh_fn()
        except BaseException as exc:
            self._session.clear()
            self._reject_pending(exc)
            logger.info("token refresh failed: %s", exc)
            raise
        else:
            self._session.set_access_token(token)
            self._resolve_pending(token)
            return token
        finally:
            self._is_refreshing = False

    def _resolve_pending(self, token: str) -> None:
        while self._pending:
            future = self._pending.popleft()
            if not future.done():
                future.set_result(token)

    def _reject_pending(self, exc: BaseException) -> None:
        while self._pending:
            future = self._pending.popleft()
            if future.done():
                continue
            if isinstance(exc, asyncio.CancelledError):
                future.cancel()
            else:
                future.set_exception(exc)
