from __future__ import annotations

import pytest

from spendo.codes import CacheState, ReferenceCodeCache
from spendo.exceptions import NetworkError, ValidationError


def test_cache_starts_loading(backend) -> None:
    cache = ReferenceCodeCache(backend)

    assert cache.state is CacheState.LOADING
    assert cache.is_loading
    assert not cache.is_ready()
    assert cache.type_codes() == ()
    assert backend.calls == []


def test_load_fetches_both_collections(backend) -> None:
    cache = ReferenceCodeCache(backend)

    assert cache.load() is CacheState.READY
    assert [code.code for code in cache.type_codes()] == ["EXP", "INC"]
    assert [code.code for code in cache.payment_codes()] == ["CC01", "CR01"]
    assert {call[0] for call in backend.calls} == {"get_type_codes", "get_payment_codes"}


@pytest.mark.parametrize("operation", ["get_type_codes", "get_payment_codes"])
def test_either_failure_fails_the_cache(backend, operation) -> None:
    backend.failures[operation] = NetworkError("offline")
    cache = ReferenceCodeCache(backend)

    assert cache.load() is CacheState.FAILED
    assert cache.error == "Could not load reference codes."
    assert cache.type_codes() == ()
    assert cache.payment_codes() == ()
    assert cache.default_type_code() == ""


def test_defaults_use_first_code(codes) -> None:
    assert codes.default_type_code() == "EXP"
    assert codes.default_payment_code() == "CC01"


def test_display_names(codes) -> None:
    assert codes.type_name("INC") == "Income"
    assert codes.payment_name("CR01") == "Cash"
    assert codes.payment_name("ZZ99") == "ZZ99"


def test_require_known_accepts_loaded_codes(codes) -> None:
    codes.require_known("EXP", "CC01")


@pytest.mark.parametrize(
    ("transaction_type", "payment_type", "field"),
    [
        ("", "CC01", "transaction_type"),
        ("XXX", "CC01", "transaction_type"),
        ("EXP", "", "payment_type"),
        ("EXP", "CC99", "payment_type"),
    ],
)
def test_require_known_rejects_stale_codes(codes, transaction_type, payment_type, field) -> None:
    with pytest.raises(ValidationError) as excinfo:
        codes.require_known(transaction_type, payment_type)

    assert excinfo.value.field == field


def test_require_known_rejects_while_not_ready(backend) -> None:
    cache = ReferenceCodeCache(backend)

    with pytest.raises(ValidationError):
        cache.require_known("EXP", "CC01")


def test_empty_collections_are_ready(backend) -> None:
    backend.type_code_list = []
    cache = ReferenceCodeCache(backend)
    cache.load()

    assert cache.is_ready()
    assert cache.default_type_code() == ""


def test_load_connects_backend_once_before_reading(backend) -> None:
    cache = ReferenceCodeCache(backend)

    cache.load()

    assert backend.connected
    assert backend.connect_count == 1
