"""Combine several promises into one."""
import logging
import threading
from typing import Any, Dict, Iterable, List

from .promise import Promise
from .result import Failure, Result

logger = logging.getLogger(__name__)


def _distinct(promises: List[Promise]) -> Dict[int, List[int]]:
    """Map each distinct promise (by identity) to the input positions it fills."""
    positions: Dict[int, List[int]] = {}
    for index, promise in enumerate(promises):
        positions.setdefault(id(promise), []).append(index)
    return positions


def gather(promises: Iterable[Promise]) -> Promise:
    """A promise that resolves with every value, in input order.

    The first failure among the inputs resolves the returned promise with
    that ``Failure``; remaining results are then ignored. A promise listed
    more than once is observed once and fills every position it holds.
    """
    promises = list(promises)
    if not promises:
        return Promise.resolved([])

    rv = Promise()
    values: List[Any] = [None] * len(promises)
    positions = _distinct(promises)
    pending = {'count': len(positions)}
    lock = threading.Lock()

    def collect(indices: List[int], result: Result) -> None:
        if isinstance(result, Failure):
            rv.try_resolve(result)
            return
        with lock:
            for index in indices:
                values[index] = result.value
            pending['count'] -= 1
            done = pending['count'] == 0
        if done:
            rv.try_resolve(list(values))

    for indices in positions.values():
        promises[indices[0]].observe(lambda result, indices=indices: collect(indices, result))

    return rv


def race(promises: Iterable[Promise]) -> Promise:
    """A promise that resolves with whichever input settles first."""
    promises = list(promises)
    rv = Promise()
    for indices in _distinct(promises).values():
        promises[indices[0]].observe(rv.try_resolve)
    return rv


def timeout(promise: Promise, seconds: float) -> Promise:
    """Race ``promise`` against a timer.

    The returned promise resolves with ``promise``'s result, or with
    ``Failure(TimeoutError)`` if ``seconds`` elapse first.
    """
    rv = Promise()

    def expire() -> None:
        if rv.try_resolve(Failure(TimeoutError(f"promise not settled within {seconds}s"))):
            logger.debug("timed out after %ss waiting for %r", seconds, promise)

    timer = threading.Timer(seconds, expire)
    timer.daemon = True

    def settle(result: Result) -> None:
        timer.cancel()
        rv.try_resolve(result)

    timer.start()
    promise.observe(settle)
    return rv
