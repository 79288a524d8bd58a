"""Client orchestration layer for Spendo."""

from __future__ import annotations

import datetime as dt
import logging
import os

from spendo.codes import CacheState, ReferenceCodeCache
from spendo.config import ClientConfig, load_config
from spendo.gateway import HttpLedgerGateway
from spendo.models import ExpenditureRecord
from spendo.persistence import LedgerBackend
from spendo.screens import CalendarScreen, SearchScreen

# Configure logging
logger = logging.getLogger("spendo")
log_level = os.environ.get('LOGGING_LEVEL', 'INFO').upper()
logger.setLevel(getattr(logging, log_level, logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    logger.addHandler(handler)


class SpendoClient:
    """Coordinate the ledger backend and the screen components built on it."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        backend: LedgerBackend | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        """Initialize the client with a backend.

        Args:
            base_url: Ledger service base URL, overrides environment and config file
            timeout_seconds: Per-request timeout, overrides environment and config file
            backend: Optional custom backend; defaults to the HTTP gateway
            config: Optional fully resolved configuration
        """
        self.config = config or load_config(base_url=base_url, timeout_seconds=timeout_seconds)
        self.backend = backend or HttpLedgerGateway(
            self.config.base_url, timeout_seconds=self.config.timeout_seconds
        )

    def __enter__(self) -> "SpendoClient":
        """Open the backend connection."""
        self.backend.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Close the backend connection."""
        self.close()

    def close(self) -> None:
        self.backend.close()

    def load_codes(self) -> ReferenceCodeCache:
        """Load both reference code collections into a fresh cache."""
        cache = ReferenceCodeCache(self.backend)
        if cache.load() is CacheState.FAILED:
            logger.warning(cache.error)
        return cache

    def calendar_screen(self, today: dt.date | None = None) -> CalendarScreen:
        return CalendarScreen(self.backend, today=today, window_ms=self.config.double_tap_ms)

    def search_screen(self) -> SearchScreen:
        return SearchScreen(self.backend)

    def expenditure(self, start_date: dt.date, end_date: dt.date) -> list[ExpenditureRecord]:
        """Return expenditure totals per title for the date range."""
        return self.backend.fetch_expenditure(start_date, end_date)
