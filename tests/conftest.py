"""Pytest configuration and shared fixtures.

Controllers run against an in-memory ledger; the HTTP gateway tests stub
the ``requests`` session instead.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src" / "python"

for path in (SRC_DIR, ROOT_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from spendo.codes import ReferenceCodeCache  # noqa: E402
from tests.utils.memory_backend import InMemoryBackend  # noqa: E402


@pytest.fixture()
def backend() -> InMemoryBackend:
    """Empty ledger with the default code collections."""
    return InMemoryBackend()


@pytest.fixture()
def coffee(backend: InMemoryBackend):
    """The single coffee entry on 2024-05-01."""
    return backend.seed(
        key=1,
        date=dt.date(2024, 5, 1),
        title="Coffee",
        amount=4500,
        transaction_type="EXP",
        payment_type="CC01",
    )


@pytest.fixture()
def codes(backend: InMemoryBackend) -> ReferenceCodeCache:
    """Reference code cache already loaded from the backend."""
    cache = ReferenceCodeCache(backend)
    cache.load()
    return cache


@pytest.fixture()
def sample_entry_payload() -> dict:
    return {
        "spendoNo": 1,
        "spendoDate": "2024-05-01",
        "spendoTitle": "Coffee",
        "spendoContent": "Morning latte",
        "spendoPrice": 4500,
        "spendoType": "EXP",
        "spendoCodeType": "CC01",
    }
