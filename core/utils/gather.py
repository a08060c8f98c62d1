"""Scatter-gather helper that reports failures as values."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one awaitable: either ``value`` or ``error`` is set."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _bounded(aw: Awaitable[T], timeout: Optional[float]) -> T:
    if timeout is None or timeout <= 0:
        return await aw
    return await asyncio.wait_for(aw, timeout=timeout)


async def gather_settled(
    awaitables: Sequence[Awaitable[T]],
    timeout: Optional[float] = None,
) -> list[Settled[T]]:
    """Run awaitables concurrently and wait for all of them to settle.

    Never raises for a failing awaitable: each failure is returned as a
    ``Settled`` carrying the exception. Results are in input order. With
    ``timeout`` set, each awaitable is individually bounded and a late one
    settles with ``asyncio.TimeoutError``.

    Cancellation of the caller still propagates.
    """
    outcomes = await asyncio.gather(
        *(_bounded(aw, timeout) for aw in awaitables),
        return_exceptions=True,
    )

    settled: list[Settled[T]] = []
    for outcome in outcomes:
        if isinstance(outcome, (Exception, asyncio.CancelledError)):
            settled.append(Settled(error=outcome))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            settled.append(Settled(value=outcome))
    return settled
