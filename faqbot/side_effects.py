"""
Best-effort side effects: storage writes and Slack dispatches are logged on
failure and never interrupt the caller.
"""
from typing import Any, Awaitable, Callable, Optional

from starlette.concurrency import run_in_threadpool

from faqbot.exceptions import DispatchFailure, StoreWriteFailure
from faqbot.logger import logger


async def persist(write: Callable[[Any], None], record: Any) -> bool:
    """Run a blocking store write in the thread pool. Returns False if it failed."""
    try:
        await run_in_threadpool(write, record)
    except StoreWriteFailure as e:
        logger.error("Error storing %s: %s", type(record).__name__, e)
        return False
    logger.debug("%s stored successfully", type(record).__name__)
    return True


async def dispatch(send: Awaitable[Any]) -> Optional[Any]:
    """Await a Slack call. Returns None if it failed."""
    try:
        return await send
    except DispatchFailure as e:
        logger.error("Slack API error: %s", e)
        return None
