"""Bridge between promises and asyncio/anyio code."""
import asyncio
import concurrent.futures
import inspect
import logging
from typing import Any, Callable, Optional, Union

import anyio

from .errors import RejectedError
from .promise import Promise
from .result import Failure, Result, Success, capture

logger = logging.getLogger(__name__)

AnyFuture = Union[asyncio.Future, concurrent.futures.Future]


def _as_exception(error: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    return RejectedError(error)


def to_future(promise: Promise, loop: Optional[asyncio.AbstractEventLoop] = None) -> asyncio.Future:
    """Get an asyncio future that completes when ``promise`` settles.

    The promise may be resolved from any thread; completion is always
    scheduled on ``loop`` (the running loop by default).

    Unless the promise is multicast this takes its continuation slot,
    replacing whatever was attached with ``then`` before. To wait on a
    chain, pass its last promise (``to_future(p.then(handle))``) rather
    than attaching to ``p`` twice.
    """
    loop = loop or asyncio.get_running_loop()
    future = loop.create_future()

    def deliver(result: Result) -> None:
        if future.done():
            return
        if isinstance(result, Failure):
            future.set_exception(_as_exception(result.error))
        else:
            future.set_result(result.value)

    def continuation(result: Result) -> None:
        if loop.is_closed():
            logger.debug("event loop closed before %r settled", promise)
            return
        loop.call_soon_threadsafe(deliver, result)

    promise.observe(continuation)
    return future


async def wait(promise: Promise, timeout: Optional[float] = None) -> Any:
    """Wait for ``promise`` and return its value, raising its failure.

    Attaches through ``to_future``, so a single-slot promise loses any
    continuation attached before; wait on the end of the chain instead.

    Raises:
      TimeoutError: ``timeout`` seconds elapsed first. The promise itself
        is left untouched.
    """
    future = to_future(promise)
    if timeout is None:
        return await future
    with anyio.fail_after(timeout):
        return await future


def from_future(future: AnyFuture) -> Promise:
    """Get a promise settled by an asyncio or concurrent.futures future.

    A cancelled future settles the promise with ``Failure(CancelledError)``.
    """
    rv = Promise()

    def on_done(done: AnyFuture) -> None:
        if done.cancelled():
            rv.resolve(Failure(asyncio.CancelledError()))
            return
        error = done.exception()
        if error is not None:
            rv.resolve(Failure(error))
        else:
            rv.resolve(Success(done.result()))

    future.add_done_callback(on_done)
    return rv


def spawn(handler: Callable, *args, **kwargs) -> Promise:
    """Run a sync or async handler and return a promise for its outcome.

    Coroutines are scheduled as tasks on the running loop; plain return
    values and exceptions settle the promise immediately.

    Raises:
      RuntimeError: the handler is asynchronous and no event loop is
        running in this thread. The handler is not called.
    """
    if inspect.iscoroutinefunction(handler):
        loop = asyncio.get_running_loop()
        return from_future(loop.create_task(handler(*args, **kwargs)))

    result = capture(handler, *args, **kwargs)
    if isinstance(result, Success) and inspect.iscoroutine(result.value):
        coro = result.value
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        return from_future(loop.create_task(coro))
    return Promise.resolved(result)
