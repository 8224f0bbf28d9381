"""Outcome of a promise: a value or the reason it failed."""
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import RejectedError

T = TypeVar('T')


@dataclass(frozen=True)
class Success(Generic[T]):
    """A delivered value."""
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A producer-reported failure.

    ``error`` is normally an exception but any reason is accepted; it is
    only raised when someone calls ``unwrap()``.
    """
    error: Any

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        if isinstance(self.error, BaseException):
            raise self.error
        raise RejectedError(self.error)


Result = Union[Success, Failure]


def is_result(value: Any) -> bool:
    """Whether ``value`` is already a ``Success`` or ``Failure``."""
    return isinstance(value, (Success, Failure))


def capture(fn: Callable, *args, **kwargs) -> Result:
    """Run ``fn`` and wrap its return value or exception."""
    try:
        return Success(fn(*args, **kwargs))
    except Exception as e:
        return Failure(e)
