"""Translate filter criteria into list endpoint query params."""

from __future__ import annotations

from spendo.exceptions import ValidationError
from spendo.models import ALL, FilterCriteria
from spendo.schema import format_date

__all__ = ["ALL", "build_query"]


def _code_filter(value: str | None) -> str | None:
    if value is None or value == ALL:
        return None
    return value


def build_query(criteria: FilterCriteria) -> dict[str, str]:
    """Build canonical query params for ``/spendo/spendoList``.

    The ``ALL`` sentinel and an empty title both mean "no filter" and are
    omitted rather than sent. Other values pass through unchanged.

    Raises:
        ValidationError: if either date is missing
    """
    if criteria.start_date is None:
        raise ValidationError("start date is required", "start_date")
    if criteria.end_date is None:
        raise ValidationError("end date is required", "end_date")

    params = {
        "startDt": format_date(criteria.start_date),
        "endDt": format_date(criteria.end_date),
    }
    if criteria.title:
        params["spendoTitle"] = criteria.title
    transaction_type = _code_filter(criteria.transaction_type)
    if transaction_type is not None:
        params["spendoType"] = transaction_type
    payment_type = _code_filter(criteria.payment_type)
    if payment_type is not None:
        params["spendoCodeType"] = payment_type
    return params
