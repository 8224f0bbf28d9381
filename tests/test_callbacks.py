from __future__ import annotations

import pytest

from promissory.callbacks import CompletionHandler, from_completion


def test_completion_resolves_later():
    handlers = []

    def operation(name, done):
        handlers.append(done)

    p = from_completion(operation, "job")
    assert p.is_pending
    assert isinstance(handlers[0], CompletionHandler)
    handlers[0]("result")
    assert p.value == "result"


def test_completion_failure():
    err = ConnectionError("reset")

    def operation(done, retries=0):
        assert retries == 3
        done.fail(err)

    p = from_completion(operation, retries=3)
    assert p.is_rejected
    assert p.result.error is err


def test_completion_called_twice_keeps_first():
    def operation(done):
        done.succeed(1)
        done(2)

    assert from_completion(operation).value == 1


def test_operation_start_error_propagates():
    def operation(done):
        raise TypeError("bad arguments")

    with pytest.raises(TypeError):
        from_completion(operation)
