"""Exceptions raised by promissory."""
from typing import Any


class PromiseError(Exception):
    """Base class for promissory errors."""


class RedundantResolutionError(PromiseError):
    """A settled promise was resolved again while the ``raise`` policy is active."""

    def __init__(self, promise: Any, result: Any):
        super().__init__(f"{promise!r} is already settled; ignored {result!r}")
        self.promise = promise
        self.result = result


class RejectedError(PromiseError):
    """Carries a failure reason that is not itself an exception."""

    def __init__(self, reason: Any):
        super().__init__(reason)
        self.reason = reason
