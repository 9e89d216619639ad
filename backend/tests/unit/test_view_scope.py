"""Unit tests for the view liveness scope."""

import asyncio

import pytest

from sportsnews.application.views import ViewScope


async def _value(value, delay: float = 0):
    await asyncio.sleep(delay)
    return value


async def _fail():
    await asyncio.sleep(0)
    raise RuntimeError("load failed")


@pytest.mark.asyncio
async def test_gather_returns_results_in_order():
    scope = ViewScope()
    assert await scope.gather(_value("a", 0.01), _value("b")) == ["a", "b"]


@pytest.mark.asyncio
async def test_gather_reraises_a_task_error_after_all_finish():
    scope = ViewScope()
    finished = []

    async def slow():
        await asyncio.sleep(0.01)
        finished.append(True)

    with pytest.raises(RuntimeError, match="load failed"):
        await scope.gather(_fail(), slow())
    assert finished == [True]


@pytest.mark.asyncio
async def test_close_cancels_gathered_tasks():
    scope = ViewScope()
    gate = asyncio.Event()
    reached = []

    async def blocked():
        await gate.wait()
        reached.append(True)

    waiting = asyncio.create_task(scope.gather(blocked(), _value("done")))
    await asyncio.sleep(0.01)
    await scope.close()
    gate.set()

    assert await waiting == [None, "done"]
    assert reached == []
    assert scope.alive is False


@pytest.mark.asyncio
async def test_gather_on_closed_scope_runs_nothing():
    scope = ViewScope()
    await scope.close()
    ran = []

    async def work():
        ran.append(True)

    assert await scope.gather(work()) == [None]
    await asyncio.sleep(0)
    assert ran == []
