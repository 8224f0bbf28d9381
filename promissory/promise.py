"""Single-resolution promise with chaining."""
import collections
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

from . import config
from .errors import RedundantResolutionError
from .result import Failure, Result, Success, capture, is_result
from .state import PENDING, Pending, Resolved, State

logger = logging.getLogger(__name__)

T = TypeVar('T')

Continuation = Callable[[Result], Any]

# Continuations queued by settlements on this thread, drained by the
# outermost one so chains of any length run at constant stack depth.
_delivery = threading.local()


def _deliver(continuations: List[Continuation], result: Result) -> None:
    queue = getattr(_delivery, 'queue', None)
    if queue is not None:
        queue.extend((continuation, result) for continuation in continuations)
        return
    queue = _delivery.queue = collections.deque(
        (continuation, result) for continuation in continuations
    )
    try:
        while queue:
            continuation, settled = queue.popleft()
            continuation(settled)
    finally:
        _delivery.queue = None


@dataclass(frozen=True)
class _Forward:
    """A result handed on untouched by a chained promise."""
    result: Result


class Promise(Generic[T]):
    """A value that becomes available at most once, now or later.

    A promise starts pending and is settled by the first call to
    ``resolve``; later calls are ignored. Continuations attached with
    ``then`` run synchronously, either at attachment time when the promise
    is already settled or inside the ``resolve`` call that settles it.
    A promise settled from within a running continuation delivers once
    that continuation returns, still before the outermost ``resolve``
    returns.

    By default a promise holds a single continuation slot and attaching a
    new continuation while pending replaces the previous one. Pass
    ``multicast=True`` to keep every continuation and run them in
    registration order.

    Example:
      p = Promise()
      p.then(lambda v: v + 1).then(print)
      p.resolve(41)   # prints 42
    """

    __slots__ = ('_lock', '_state', '_continuations', '_multicast', '__weakref__')

    def __init__(self,
                 executor: Optional[Callable[[Callable[[Any], None]], Any]] = None,
                 multicast: Optional[bool] = None):
        self._lock = threading.Lock()
        self._state: State = PENDING
        self._continuations: List[Continuation] = []
        self._multicast = config.get_multicast() if multicast is None else multicast
        if executor is not None:
            executor(self.resolve)

    @classmethod
    def resolved(cls, value: Any) -> 'Promise':
        """Create a promise already resolved with ``value``."""
        promise = cls()
        promise.resolve(value)
        return promise

    @classmethod
    def rejected(cls, error: Any) -> 'Promise':
        """Create a promise already resolved with ``Failure(error)``."""
        promise = cls()
        promise.reject(error)
        return promise

    @property
    def multicast(self) -> bool:
        return self._multicast

    @property
    def is_pending(self) -> bool:
        return isinstance(self._state, Pending)

    @property
    def is_settled(self) -> bool:
        return isinstance(self._state, Resolved)

    @property
    def is_fulfilled(self) -> bool:
        result = self.result
        return result is not None and result.ok

    @property
    def is_rejected(self) -> bool:
        result = self.result
        return result is not None and not result.ok

    @property
    def result(self) -> Optional[Result]:
        """The settled ``Success``/``Failure``, or None while pending."""
        state = self._state
        if isinstance(state, Resolved):
            return state.result
        return None

    @property
    def value(self) -> Optional[T]:
        """The resolved value, or None while pending or after a failure."""
        result = self.result
        if isinstance(result, Success):
            return result.value
        return None

    def try_resolve(self, value: Any) -> bool:
        """Settle the promise unless it already is; return whether this call won.

        ``Success`` and ``Failure`` instances settle the promise as they
        are; anything else is wrapped in ``Success``.
        """
        result = value if is_result(value) else Success(value)
        with self._lock:
            if not isinstance(self._state, Pending):
                return False
            self._state = Resolved(result)
            continuations = self._continuations
            self._continuations = []
        if continuations:
            _deliver(continuations, result)
        return True

    def resolve(self, value: Any) -> None:
        """Resolve the promise. Only the first resolution has an effect."""
        if not self.try_resolve(value):
            self._redundant(value)

    def reject(self, error: Any) -> None:
        """Resolve the promise with ``Failure(error)``."""
        self.resolve(Failure(error))

    def _redundant(self, value: Any) -> None:
        policy = config.get_redundant_resolve()
        if policy == 'raise':
            raise RedundantResolutionError(self, value)
        level = logging.WARNING if policy == 'warn' else logging.DEBUG
        logger.log(level, "ignoring redundant resolution of %r with %r", self, value)

    def _attach(self, continuation: Continuation) -> None:
        with self._lock:
            state = self._state
            if isinstance(state, Pending):
                if self._multicast:
                    self._continuations.append(continuation)
                else:
                    self._continuations = [continuation]
                return
        continuation(state.result)

    def _derive(self, on_settled: Callable[[Result], Any]) -> 'Promise':
        """Chain a new promise resolved from ``on_settled``'s return value.

        A returned promise is adopted, a ``_Forward`` settles the new
        promise with the result it carries, and any other value becomes
        ``Success(value)``. Exceptions become a ``Failure``.
        """
        def executor(resolve):
            def continuation(result: Result) -> None:
                produced = capture(on_settled, result)
                if isinstance(produced, Failure):
                    logger.debug("continuation of %r raised %r", self, produced.error)
                    resolve(produced)
                    return
                inner = produced.value
                if isinstance(inner, Promise):
                    inner._attach(resolve)
                elif isinstance(inner, _Forward):
                    resolve(inner.result)
                else:
                    resolve(Success(inner))

            self._attach(continuation)

        return Promise(executor, multicast=self._multicast)

    def then(self, on_resolved: Callable[[T], Any]) -> 'Promise':
        """Attach a continuation for the resolved value.

        Args:
          on_resolved: called with the value once the promise succeeds.
            It may return nothing, a plain value (map) or a promise
            (chaining). Plain values are delivered as they are, including
            ``Success``/``Failure`` instances; raise or return
            ``Promise.rejected(...)`` to fail the chain.

        Returns:
          A promise for ``on_resolved``'s outcome. A failure of this
          promise skips ``on_resolved`` and is passed through unchanged.
        """
        def on_settled(result: Result) -> Any:
            if isinstance(result, Failure):
                return _Forward(result)
            return on_resolved(result.value)

        return self._derive(on_settled)

    def catch(self, on_failure: Callable[[Any], Any]) -> 'Promise':
        """Attach a continuation for the failure reason; successes pass through."""
        def on_settled(result: Result) -> Any:
            if isinstance(result, Success):
                return _Forward(result)
            return on_failure(result.error)

        return self._derive(on_settled)

    def observe(self, on_settled: Callable[[Result], Any]) -> 'Promise':
        """Attach a continuation that receives the raw ``Success``/``Failure``."""
        return self._derive(on_settled)

    def __repr__(self):
        result = self.result
        if result is None:
            v = '(pending)'
        elif isinstance(result, Failure):
            v = repr(result.error) + ' (rejected)'
        else:
            v = repr(result.value)
        return '<%s %s>' % (self.__class__.__name__, v)
