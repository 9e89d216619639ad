"""Liveness token for a mounted view."""

import asyncio
from collections.abc import Coroutine
from typing import Any


class ViewScope:
    """Ties asynchronous work to the lifetime of a view.

    Views check ``alive`` after every await before touching their state, and
    tasks started through ``spawn`` or ``gather`` are cancelled when the view
    unmounts.
    """

    def __init__(self) -> None:
        self._alive = True
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def alive(self) -> bool:
        return self._alive

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def gather(self, *coros: Coroutine[Any, Any, Any]) -> list[Any]:
        """Run ``coros`` as scoped tasks and wait for all of them.

        Results come back in order. A task cancelled by ``close`` yields None;
        the first exception raised by any other task is re-raised. Nothing
        runs once the scope is closed.
        """
        if not self._alive:
            for coro in coros:
                coro.close()
            return [None] * len(coros)

        tasks = [self.spawn(coro) for coro in coros]
        if not tasks:
            return []
        await asyncio.wait(tasks)

        results: list[Any] = []
        error: BaseException | None = None
        for task in tasks:
            if task.cancelled():
                results.append(None)
                continue
            exc = task.exception()
            if exc is not None:
                error = error or exc
                results.append(None)
            else:
                results.append(task.result())
        if error is not None:
            raise error
        return results

    async def close(self) -> None:
        self._alive = False
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        # Outcomes no longer matter once the view is gone.
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
