"""promissory: single-resolution promises with chaining. Central exports."""
import logging

from promissory.promise import Promise

from promissory.deferred import Deferred

from promissory.result import (
  Success,
  Failure,
  Result,
  capture
)

from promissory.state import (
  Pending,
  Resolved,
  PENDING
)

from promissory.errors import (
  PromiseError,
  RedundantResolutionError,
  RejectedError
)

from promissory.callbacks import (
  CompletionHandler,
  from_completion
)

from promissory.combinators import (
  gather,
  race,
  timeout
)

from promissory import config

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
  # Core
  'Promise',
  'Deferred',

  # Results and states
  'Success',
  'Failure',
  'Result',
  'capture',
  'Pending',
  'Resolved',
  'PENDING',

  # Errors
  'PromiseError',
  'RedundantResolutionError',
  'RejectedError',

  # Completion callbacks
  'CompletionHandler',
  'from_completion',

  # Combinators
  'gather',
  'race',
  'timeout',

  # Configuration
  'config',
]
