from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from typing import Any, Awaitable, TypeVar

T = TypeVar("T")


async def _await_compat(x: Awaitable[T]) -> T:
    return await x


async def maybe_await(x: Any) -> Any:
    """Await *x* if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(x):
        return await _await_compat(x)
    return x


def run_sync(coro: Awaitable[T]) -> T:
    """Run *coro* to completion from synchronous code.

    Uses ``asyncio.run`` when the calling thread has no running loop; otherwise
    the coroutine is run on a fresh loop in a helper thread so the caller's
    loop is never re-entered.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await_compat(coro))

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, _await_compat(coro)).result()


__all__ = ["maybe_await", "run_sync"]
