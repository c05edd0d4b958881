"""
Response body cleanup.

Responses come back from the host client with their body unread. Leaving
a body unread on a pooled connection keeps the connection checked out, so
every code path that obtains a response must end in one of these helpers.
"""

import httpx
import structlog

logger = structlog.get_logger(__name__)


def consume(response: httpx.Response) -> None:
    """
    Drain any unread body and close the response.

    A no-op for responses that are already closed (fully read or closed by
    a handler).

    Raises:
        Whatever the underlying stream raises while draining.
    """
    if response.is_closed:
        return
    try:
        if not response.is_stream_consumed:
            for _ in response.iter_raw():
                pass
    finally:
        response.close()


def consume_quietly(response: httpx.Response) -> None:
    """Same as consume() but logs and swallows drain failures."""
    try:
        consume(response)
    except Exception as e:
        logger.warning(
            "Error consuming response content",
            error_type=type(e).__name__,
            error=str(e),
        )


async def aconsume(response: httpx.Response) -> None:
    """Async twin of consume() for responses from an httpx.AsyncClient."""
    if response.is_closed:
        return
    try:
        if not response.is_stream_consumed:
            async for _ in response.aiter_raw():
                pass
    finally:
        await response.aclose()


async def aconsume_quietly(response: httpx.Response) -> None:
    """Async twin of consume_quietly()."""
    try:
        await aconsume(response)
    except Exception as e:
        logger.warning(
            "Error consuming response content",
            error_type=type(e).__name__,
            error=str(e),
        )
