from __future__ import annotations

import pytest

from promissory import config


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.delenv("PROMISSORY_REDUNDANT_RESOLVE", raising=False)
    monkeypatch.delenv("PROMISSORY_MULTICAST", raising=False)
    config.reset_all()
    yield
    config.reset_all()
