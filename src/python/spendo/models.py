"""Domain models and data transfer objects."""

from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from typing import Any

from spendo.exceptions import ValidationError

ALL = "ALL"
DRAFT_FIELDS = ("date", "title", "content", "amount", "transaction_type", "payment_type")


def _ensure_date(value: dt.date | dt.datetime | str | None, field_name: str) -> dt.date:
    """Normalize a date, datetime or ISO string to a date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise ValidationError(f"{field_name} must use YYYY-MM-DD format", field_name) from exc
    raise ValidationError(f"{field_name} is required", field_name)


def _ensure_non_empty(value: str | None, field_name: str) -> str:
    """Validate required text fields."""
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", field_name)
    return value


def _ensure_amount(value: int | str | None, field_name: str) -> int:
    """Parse and validate a positive integer amount in the smallest currency unit."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number", field_name)
    if isinstance(value, int):
        amount = value
    else:
        text = (value or "").replace(",", "").strip()
        if not text:
            raise ValidationError(f"{field_name} is required", field_name)
        if not text.isdecimal():
            raise ValidationError(f"{field_name} must be a whole number", field_name)
        amount = int(text)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero", field_name)
    return amount


@dataclass(frozen=True)
class ReferenceCode:
    """Backend-defined enumeration value used by selectors and payloads."""
    key: int
    code: str
    name: str


@dataclass(frozen=True)
class EntryDTO:
    """Validated ledger entry input for the create and update endpoints."""
    date: dt.date
    title: str
    amount: int
    transaction_type: str
    payment_type: str
    content: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _ensure_date(self.date, "date"))
        object.__setattr__(self, "title", _ensure_non_empty(self.title, "title"))
        object.__setattr__(self, "amount", _ensure_amount(self.amount, "amount"))
        object.__setattr__(
            self,
            "transaction_type",
            _ensure_non_empty(self.transaction_type, "transaction_type"),
        )
        object.__setattr__(
            self, "payment_type", _ensure_non_empty(self.payment_type, "payment_type")
        )
        object.__setattr__(self, "content", self.content or "")


@dataclass(frozen=True)
class EntryRecord:
    """Persisted ledger entry as returned by the service."""
    key: int
    date: dt.date
    title: str
    content: str
    amount: int
    transaction_type: str
    payment_type: str


@dataclass(frozen=True)
class FilterCriteria:
    """Filter inputs for the entry list.

    ``transaction_type`` and ``payment_type`` hold either a reference code or
    the ``ALL`` sentinel. ``None`` is treated the same as ``ALL``.
    """
    start_date: dt.date | None
    end_date: dt.date | None
    title: str = ""
    transaction_type: str | None = ALL
    payment_type: str | None = ALL

    @classmethod
    def for_day(cls, day: dt.date) -> "FilterCriteria":
        """Criteria matching a single calendar day."""
        return cls(start_date=day, end_date=day)

    @classmethod
    def today(cls) -> "FilterCriteria":
        """Default criteria used when a screen is first mounted."""
        return cls.for_day(dt.date.today())


@dataclass
class EntryDraft:
    """Mutable, staged copy of an entry's fields.

    ``amount`` is kept as typed text until the draft is converted, so an
    invalid value never leaves the draft.
    """
    date: dt.date | None = None
    title: str = ""
    content: str = ""
    amount: str = ""
    transaction_type: str = ""
    payment_type: str = ""
    key: int | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: EntryRecord) -> "EntryDraft":
        return cls(
            key=record.key,
            date=record.date,
            title=record.title,
            content=record.content,
            amount=str(record.amount),
            transaction_type=record.transaction_type,
            payment_type=record.payment_type,
        )

    def set_field(self, name: str, value: Any) -> None:
        """Stage a single field value, clearing any message attached to it."""
        if name not in DRAFT_FIELDS:
            raise KeyError(f"Unknown draft field: {name}")
        if name == "amount" and isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        setattr(self, name, value)
        self.errors.pop(name, None)

    def to_dto(self) -> EntryDTO:
        """Convert the staged values into a validated payload."""
        return EntryDTO(
            date=self.date,
            title=self.title,
            amount=self.amount,
            transaction_type=self.transaction_type,
            payment_type=self.payment_type,
            content=self.content,
        )


@dataclass(frozen=True)
class ExpenditureRecord:
    """Expenditure total for one title within a date range."""
    name: str
    amount: int
