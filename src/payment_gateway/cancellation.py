"""Cooperative cancellation driven by an asyncio.Event.

Callers may hand the gateway a cancel event tied to the lifetime of the
inbound request. Setting it aborts the in-flight authorizer call promptly.
Plain task cancellation (asyncio.CancelledError) is left to propagate on its
own and needs no help from this module.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from payment_gateway.models.exceptions import OperationCancelled

T = TypeVar("T")


def raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    """Raise OperationCancelled if the event has already been set."""
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelled("Operation cancelled by caller")


async def run_cancellable(
    awaitable: Awaitable[T],
    cancel_event: asyncio.Event | None,
) -> T:
    """
    Await an operation, aborting it if cancel_event is set first.

    Args:
        awaitable: The operation to run (typically a network call)
        cancel_event: Optional event; when set, the operation is cancelled

    Returns:
        The operation's result

    Raises:
        OperationCancelled: The event was set before the operation finished
    """
    if cancel_event is None:
        return await awaitable

    if cancel_event.is_set():
        # The operation never started; close it so it is not left unawaited.
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise OperationCancelled("Operation cancelled by caller")

    operation = asyncio.ensure_future(awaitable)
    cancel_wait = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait(
            {operation, cancel_wait},
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        operation.cancel()
        raise
    finally:
        cancel_wait.cancel()

    if not operation.done():
        operation.cancel()
        try:
            await operation
        except asyncio.CancelledError:
            pass
        raise OperationCancelled("Operation cancelled by caller")

    return operation.result()
