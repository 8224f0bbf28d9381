from __future__ import annotations

import asyncio
import concurrent.futures
import threading

import pytest

from promissory import aio
from promissory.errors import RejectedError
from promissory.promise import Promise


@pytest.mark.anyio
async def test_wait_for_already_resolved():
    assert await aio.wait(Promise.resolved(3)) == 3


@pytest.mark.anyio
async def test_wait_resolved_from_another_thread():
    p = Promise()
    timer = threading.Timer(0.01, p.resolve, args=("from thread",))
    timer.start()
    try:
        assert await aio.wait(p, timeout=5) == "from thread"
    finally:
        timer.join()


@pytest.mark.anyio
async def test_wait_raises_failure():
    with pytest.raises(KeyError):
        await aio.wait(Promise.rejected(KeyError("k")))
    with pytest.raises(RejectedError):
        await aio.wait(Promise.rejected("plain reason"))


@pytest.mark.anyio
async def test_wait_timeout():
    p = Promise()
    with pytest.raises(TimeoutError):
        await aio.wait(p, timeout=0.01)
    assert p.is_pending


@pytest.mark.anyio
async def test_to_future():
    p = Promise()
    future = aio.to_future(p)
    assert not future.done()
    p.resolve("x")
    assert await future == "x"


@pytest.mark.anyio
async def test_from_asyncio_future():
    future = asyncio.get_running_loop().create_future()
    p = aio.from_future(future)
    future.set_result(7)
    assert await aio.wait(p) == 7


@pytest.mark.anyio
async def test_from_cancelled_future():
    future = asyncio.get_running_loop().create_future()
    p = aio.from_future(future)
    future.cancel()
    await asyncio.sleep(0)
    assert p.is_rejected
    assert isinstance(p.result.error, asyncio.CancelledError)


def test_from_concurrent_future():
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        p = aio.from_future(pool.submit(lambda: 1 + 1))
    assert p.value == 2


@pytest.mark.anyio
async def test_spawn_async_handler():
    async def handler(x):
        await asyncio.sleep(0)
        return x * 2

    assert await aio.wait(aio.spawn(handler, 4)) == 8


def test_spawn_sync_handler():
    assert aio.spawn(lambda x: x + 1, 1).value == 2
    assert isinstance(aio.spawn(int, "nope").result.error, ValueError)


def test_spawn_async_handler_without_loop():
    called = []

    async def handler():
        called.append(True)

    with pytest.raises(RuntimeError):
        aio.spawn(handler)
    assert called == []


def test_spawn_returned_coroutine_without_loop():
    async def work():
        return 1

    with pytest.raises(RuntimeError):
        aio.spawn(lambda: work())


@pytest.mark.anyio
async def test_wait_on_end_of_chain():
    p = Promise()
    out = p.then(lambda v: v * 2)
    threading.Timer(0.01, p.resolve, args=(21,)).start()
    assert await aio.wait(out, timeout=5) == 42
