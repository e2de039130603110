from __future__ import annotations

import logging
from typing import Any, Awaitable, Optional, TypeVar

from azure.core.polling import AsyncLROPoller

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def wait_until_completed(
    operation: Awaitable[AsyncLROPoller[T]],
    *,
    description: Optional[str] = None,
) -> T:
    """Start a long-running Azure operation and block until it reaches a terminal state.

    `operation` is the awaitable returned by an async ``begin_*`` call. The poller's
    ``result()`` raises if the operation ends in a failed or cancelled state, so the
    caller only ever sees a completed resource (or ``None`` for deletes).
    """

    poller = await operation
    if description:
        logger.debug("Waiting for %s (status=%s)", description, _status(poller))

    result = await poller.result()

    if description:
        logger.debug("%s finished (status=%s)", description, _status(poller))
    return result


def _status(poller: Any) -> str:
    return str(poller.status())
