"""Structured fan-out/fan-in helpers for concurrent API requests."""

import asyncio
from collections.abc import Coroutine, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


async def gather_in_order(coros: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """Run coroutines concurrently and return their results in submission order.

    All coroutines run inside one ``asyncio.TaskGroup``. If any of them
    raises, the remaining ones are cancelled and the first failure is
    re-raised as-is rather than wrapped in an ``ExceptionGroup``.

    Args:
        coros: Coroutines to run

    Returns:
        Results positioned by submission index, independent of completion order
    """
    coros = list(coros)
    if not coros:
        return []

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except ExceptionGroup as eg:
        raise _first_leaf(eg) from None

    return [task.result() for task in tasks]


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
