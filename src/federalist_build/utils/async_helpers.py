from __future__ import annotations

import asyncio
import concurrent.futures
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run *coro* to completion from synchronous code.

    Without a running event loop this is ``asyncio.run``. When called from
    inside a running loop (Jupyter, a sync helper invoked from async code),
    the coroutine runs on a private loop in a worker thread and the calling
    thread blocks until it finishes.

    Raises:
        Any exception raised by *coro*.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


async def with_timeout(coro: Coroutine[Any, Any, T], seconds: float | None) -> T:
    """Await *coro*, bounded by *seconds* when given.

    Raises:
        asyncio.TimeoutError: If *coro* does not complete within *seconds*.
    """
    if seconds is None:
        return await coro
    return await asyncio.wait_for(coro, timeout=seconds)
