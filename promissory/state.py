"""Lifecycle states of a promise."""
from dataclasses import dataclass
from typing import Union

from .result import Result


@dataclass(frozen=True)
class Pending:
    """No result yet."""


@dataclass(frozen=True)
class Resolved:
    """Settled with ``result``; never changes again."""
    result: Result


PENDING = Pending()

State = Union[Pending, Resolved]
