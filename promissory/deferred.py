"""Producer-side handle for a promise."""
from typing import Any, Callable, Generic, Optional, TypeVar

from .promise import Promise
from .result import Failure

T = TypeVar('T')


class Deferred(Generic[T]):
    """Keeps the resolving side of a promise away from its consumers.

    Hand out ``promise``; only the holder of the deferred can settle it.
    """

    def __init__(self, multicast: Optional[bool] = None):
        self._resolve: Callable[[Any], None]
        self._promise: Promise[T] = Promise(self._executor, multicast=multicast)

    def _executor(self, resolve: Callable[[Any], None]) -> None:
        self._resolve = resolve

    @property
    def promise(self) -> Promise[T]:
        """The consumer view."""
        return self._promise

    def resolve(self, value: T) -> None:
        """Settle the promise with ``value``; later calls are ignored."""
        self._resolve(value)

    def reject(self, reason: Any) -> None:
        """Settle the promise with ``Failure(reason)``."""
        self._resolve(Failure(reason))

    @property
    def value(self) -> Optional[T]:
        """The delivered value, or None while pending or after a failure."""
        return self._promise.value
