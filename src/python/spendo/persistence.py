"""Persistence interfaces for Spendo ledger backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
import datetime as dt

from spendo.models import EntryDTO, EntryRecord, ExpenditureRecord, ReferenceCode


class LedgerBackend(ABC):
    """Abstract interface for the reads and writes against the ledger service.

    Every method is a single round-trip with no retry. Failures are raised as
    ``ValidationError``, ``NotFoundError`` or ``NetworkError`` and never
    recovered here.
    """

    def connect(self) -> None:
        """Establish a backend connection."""

    def close(self) -> None:
        """Close the backend connection."""

    @abstractmethod
    def fetch_by_query(self, params: dict[str, str]) -> list[EntryRecord]:
        """Return entries matching canonical query params, in service order."""

    @abstractmethod
    def fetch_by_id(self, key: int) -> EntryRecord:
        """Return a single entry or raise NotFoundError."""

    @abstractmethod
    def create(self, entry: EntryDTO) -> int | None:
        """Create an entry and return the assigned identifier when reported."""

    @abstractmethod
    def update(self, key: int, entry: EntryDTO) -> None:
        """Replace the fields of an existing entry."""

    @abstractmethod
    def delete(self, key: int) -> None:
        """Delete an entry; may raise NotFoundError if already gone."""

    @abstractmethod
    def get_type_codes(self) -> list[ReferenceCode]:
        """Return transaction type codes in service order."""

    @abstractmethod
    def get_payment_codes(self) -> list[ReferenceCode]:
        """Return payment type codes in service order."""

    @abstractmethod
    def fetch_expenditure(self, start_date: dt.date, end_date: dt.date) -> list[ExpenditureRecord]:
        """Return expenditure totals per title for the date range."""
