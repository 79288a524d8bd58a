"""Wire format of the Spendo ledger service.

All responses are wrapped as ``{"data": ..., "message": ..., "status": ...}``.
Dates travel as ``YYYY-MM-DD`` strings and amounts as integers in the
smallest currency unit.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from spendo.models import EntryDTO, EntryRecord, ExpenditureRecord, ReferenceCode

DATE_FORMAT = "%Y-%m-%d"

ENDPOINTS = {
    "list": ("GET", "/spendo/spendoList"),
    "detail": ("GET", "/spendo/spendoDetails"),
    "create": ("POST", "/spendo/spendoAdd"),
    "update": ("POST", "/spendo/spendoEdit"),
    "delete": ("POST", "/spendo/spendoDel"),
    "type_codes": ("GET", "/common/commonExInCodeGet"),
    "payment_codes": ("GET", "/common/commonCcCrCodeGet"),
    "expenditure": ("GET", "/expenditure/expenditureGet"),
}

ENTRY_COLUMNS = [
    "spendoNo",
    "spendoDate",
    "spendoTitle",
    "spendoContent",
    "spendoPrice",
    "spendoType",
    "spendoCodeType",
]

# Envelope status values that map onto the error taxonomy.
NOT_FOUND_STATUSES = {"NOT_FOUND"}
REJECTED_STATUSES = {"BAD_REQUEST", "VALIDATION_ERROR"}
FAILURE_STATUSES = {"ERROR", "FAIL", "FAILURE", "INTERNAL_SERVER_ERROR"}


def format_date(value: dt.date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> dt.date:
    """Parse a service date, ignoring any time component."""
    return dt.datetime.strptime(value[:10], DATE_FORMAT).date()


def entry_to_payload(entry: EntryDTO, key: int | None = None) -> dict[str, Any]:
    """Build the request body for create (no key) or update (with key)."""
    payload: dict[str, Any] = {
        "spendoDate": format_date(entry.date),
        "spendoTitle": entry.title,
        "spendoContent": entry.content,
        "spendoPrice": entry.amount,
        "spendoType": entry.transaction_type,
        "spendoCodeType": entry.payment_type,
    }
    if key is not None:
        payload = {"spendoNo": key, **payload}
    return payload


def entry_from_payload(payload: dict[str, Any]) -> EntryRecord:
    return EntryRecord(
        key=int(payload["spendoNo"]),
        date=parse_date(str(payload["spendoDate"])),
        title=payload.get("spendoTitle") or "",
        content=payload.get("spendoContent") or "",
        amount=int(payload.get("spendoPrice") or 0),
        transaction_type=payload.get("spendoType") or "",
        payment_type=payload.get("spendoCodeType") or "",
    )


def code_from_payload(payload: dict[str, Any]) -> ReferenceCode:
    return ReferenceCode(
        key=int(payload["commonNo"]),
        code=str(payload["commonCode"]),
        name=str(payload.get("commonName") or payload["commonCode"]),
    )


def expenditure_from_payload(payload: dict[str, Any]) -> ExpenditureRecord:
    return ExpenditureRecord(
        name=payload.get("spendoTitle") or "",
        amount=int(payload.get("expenditurePrice") or 0),
    )


def created_key(data: Any) -> int | None:
    """Extract the server-assigned identifier from a create response."""
    if isinstance(data, bool):
        return None
    if isinstance(data, int):
        return data
    if isinstance(data, str) and data.isdigit():
        return int(data)
    if isinstance(data, dict) and data.get("spendoNo") is not None:
        return int(data["spendoNo"])
    return None
