"""Reference code cache for transaction and payment type selectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
import logging

from spendo.exceptions import NetworkError, NotFoundError, ValidationError
from spendo.models import ReferenceCode
from spendo.persistence import LedgerBackend

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Could not load reference codes."


class CacheState(Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class CodeCatalog(ABC):
    """Read-only view of the reference codes shared by every screen component."""

    @abstractmethod
    def is_ready(self) -> bool:
        """Return True once both collections are loaded."""

    @abstractmethod
    def type_codes(self) -> tuple[ReferenceCode, ...]:
        """Transaction type codes, empty unless ready."""

    @abstractmethod
    def payment_codes(self) -> tuple[ReferenceCode, ...]:
        """Payment type codes, empty unless ready."""

    def default_type_code(self) -> str:
        codes = self.type_codes()
        return codes[0].code if codes else ""

    def default_payment_code(self) -> str:
        codes = self.payment_codes()
        return codes[0].code if codes else ""

    def is_known_type(self, code: str) -> bool:
        return any(item.code == code for item in self.type_codes())

    def is_known_payment(self, code: str) -> bool:
        return any(item.code == code for item in self.payment_codes())

    def type_name(self, code: str) -> str:
        return _display_name(self.type_codes(), code)

    def payment_name(self, code: str) -> str:
        return _display_name(self.payment_codes(), code)

    def require_known(self, transaction_type: str, payment_type: str) -> None:
        """Reject submissions while codes are unavailable or when a code is stale.

        Raises:
            ValidationError: naming the offending field
        """
        if not self.is_ready():
            raise ValidationError("Reference codes are not loaded yet", "transaction_type")
        if not transaction_type:
            raise ValidationError("Select a transaction type", "transaction_type")
        if not self.is_known_type(transaction_type):
            raise ValidationError(
                f"Unknown transaction type {transaction_type!r}", "transaction_type"
            )
        if not payment_type:
            raise ValidationError("Select a payment type", "payment_type")
        if not self.is_known_payment(payment_type):
            raise ValidationError(f"Unknown payment type {payment_type!r}", "payment_type")


def _display_name(codes: tuple[ReferenceCode, ...], code: str) -> str:
    for item in codes:
        if item.code == code:
            return item.name
    return code


class ReferenceCodeCache(CodeCatalog):
    """Loads both code collections once per screen mount.

    The cache starts in ``LOADING`` and moves to ``READY`` only when both
    reads succeed. Either read failing leaves it ``FAILED`` with a single
    error message; there is no automatic retry.
    """

    def __init__(self, backend: LedgerBackend) -> None:
        self.backend = backend
        self.state = CacheState.LOADING
        self.error: str | None = None
        self._type_codes: tuple[ReferenceCode, ...] = ()
        self._payment_codes: tuple[ReferenceCode, ...] = ()

    def load(self) -> CacheState:
        """Fetch both collections concurrently and settle the cache state."""
        self.state = CacheState.LOADING
        self.error = None
        self.backend.connect()
        with ThreadPoolExecutor(max_workers=2) as pool:
            type_future = pool.submit(self.backend.get_type_codes)
            payment_future = pool.submit(self.backend.get_payment_codes)
            try:
                type_codes = type_future.result()
                payment_codes = payment_future.result()
            except (NetworkError, NotFoundError, ValidationError) as exc:
                logger.warning("Reference code load failed: %s", exc)
                self.state = CacheState.FAILED
                self.error = LOAD_FAILED_MESSAGE
                return self.state
        self._type_codes = tuple(type_codes)
        self._payment_codes = tuple(payment_codes)
        self.state = CacheState.READY
        logger.debug(
            "Loaded %d type codes and %d payment codes",
            len(self._type_codes),
            len(self._payment_codes),
        )
        return self.state

    def is_ready(self) -> bool:
        return self.state is CacheState.READY

    @property
    def is_loading(self) -> bool:
        return self.state is CacheState.LOADING

    def type_codes(self) -> tuple[ReferenceCode, ...]:
        return self._type_codes if self.is_ready() else ()

    def payment_codes(self) -> tuple[ReferenceCode, ...]:
        return self._payment_codes if self.is_ready() else ()
