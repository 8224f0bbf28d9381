"""Adapters for producers that report through a completion callback."""
from typing import Any, Callable

from .promise import Promise
from .result import Failure


class CompletionHandler:
    """Completion callback handed to a producer.

    Calling the handler (or ``succeed``) resolves the promise, ``fail``
    rejects it. Only the first completion counts.
    """

    def __init__(self, resolve: Callable[[Any], None]):
        self._resolve = resolve

    def __call__(self, value: Any = None) -> None:
        self._resolve(value)

    def succeed(self, value: Any = None) -> None:
        self._resolve(value)

    def fail(self, error: Any) -> None:
        self._resolve(Failure(error))


def from_completion(operation: Callable, *args, **kwargs) -> Promise:
    """Start ``operation`` and return a promise for what it completes with.

    ``operation`` is called immediately as
    ``operation(*args, handler, **kwargs)`` where ``handler`` is a
    ``CompletionHandler``. Exceptions raised while starting the operation
    propagate to the caller.

    Example:
      def fetch(url, done):
        http_client.get(url, on_response=done, on_error=done.fail)

      from_completion(fetch, 'https://example.com').then(print)
    """
    def executor(resolve):
        operation(*args, CompletionHandler(resolve), **kwargs)

    return Promise(executor)
