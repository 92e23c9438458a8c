# Copyright (c) 2024 Dynamic Content API Contributors
# SPDX-License-Identifier: MIT

"""Timeout and cooperative cancellation for execution engine calls.

The effective cancellation signal fires on whichever comes first: the fixed
deadline or the caller's own cancellation token. When it fires the wrapped
call is abandoned and QueryCancelledError is raised to the orchestrator,
which turns it into an empty result.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationReason(Enum):
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


class QueryCancelledError(Exception):
    """Guarded call was abandoned before it completed"""

    def __init__(self, reason: CancellationReason, timeout_seconds: Optional[float] = None):
        self.reason = reason
        self.timeout_seconds = timeout_seconds
        if reason is CancellationReason.TIMEOUT:
            message = f"Query timed out after {timeout_seconds}s"
        else:
            message = "Query cancelled by caller"
        super().__init__(message)

    @property
    def timed_out(self) -> bool:
        return self.reason is CancellationReason.TIMEOUT


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a call"""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self):
        await self._event.wait()

    def raise_if_cancelled(self):
        if self.is_cancelled:
            raise QueryCancelledError(CancellationReason.CANCELLED)


class TimeoutGuard:
    """Bounds a call with a deadline and an optional caller token"""

    def __init__(self, timeout_seconds: float = 5.0):
        self.timeout_seconds = timeout_seconds

    async def run(
        self,
        call: Callable[[CancellationToken], Awaitable[T]],
        cancellation: Optional[CancellationToken] = None
    ) -> T:
        """Run call(token) under the guard.

        call receives the effective token so it can stop early on its own.

        Raises:
            QueryCancelledError: deadline passed or caller cancelled
        """
        if cancellation is not None and cancellation.is_cancelled:
            raise QueryCancelledError(CancellationReason.CANCELLED)

        effective = CancellationToken()
        task = asyncio.ensure_future(call(effective))
        caller_wait = asyncio.ensure_future(cancellation.wait()) if cancellation is not None else None
        waiters = {task} if caller_wait is None else {task, caller_wait}

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=self.timeout_seconds, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            if caller_wait is not None:
                caller_wait.cancel()
            if not task.done():
                self._abandon(task, effective)

        if task in done:
            return task.result()
        if caller_wait is not None and caller_wait in done:
            raise QueryCancelledError(CancellationReason.CANCELLED)
        raise QueryCancelledError(CancellationReason.TIMEOUT, self.timeout_seconds)

    @staticmethod
    def _abandon(task: asyncio.Future, effective: CancellationToken):
        effective.cancel()
        task.cancel()
        task.add_done_callback(_log_abandoned)


def _log_abandoned(task: asyncio.Future):
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Abandoned query call finished with error: {error}")
