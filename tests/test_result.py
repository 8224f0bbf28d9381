from __future__ import annotations

import pytest

from promissory.errors import RejectedError
from promissory.result import Failure, Success, capture, is_result


def test_success_unwrap():
    r = Success(3)
    assert r.ok is True
    assert r.unwrap() == 3


def test_failure_unwrap_raises_exception():
    err = KeyError("missing")
    with pytest.raises(KeyError):
        Failure(err).unwrap()


def test_failure_unwrap_wraps_plain_reason():
    with pytest.raises(RejectedError) as info:
        Failure("nope").unwrap()
    assert info.value.reason == "nope"


def test_capture():
    assert capture(lambda a, b: a + b, 1, 2) == Success(3)
    r = capture(int, "x")
    assert isinstance(r, Failure)
    assert isinstance(r.error, ValueError)


def test_is_result():
    assert is_result(Success(None))
    assert is_result(Failure(None))
    assert not is_result(None)
