"""Shared CLI helpers."""

from __future__ import annotations

import datetime as dt

import click

from spendo.client import SpendoClient
from spendo.codes import ReferenceCodeCache
from spendo.models import EntryRecord


def parse_date(value: str | None, field_name: str) -> dt.date | None:
    """Parse an ISO date string into a date."""
    if value is None:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter("Use YYYY-MM-DD format.", param_hint=field_name) from exc


def format_amount(amount: int) -> str:
    return f"{amount:,}"


def format_entry(record: EntryRecord, codes: ReferenceCodeCache) -> str:
    return (
        f"{record.key}\t{record.date.isoformat()}\t{record.title}"
        f"\t{codes.type_name(record.transaction_type)}\t{format_amount(record.amount)}"
        f"\t{codes.payment_name(record.payment_type)}"
    )


def get_client(ctx: click.Context) -> SpendoClient:
    """Build a Spendo client from Click context.

    A ``backend`` placed in the context object replaces the HTTP gateway.
    """
    payload = ctx.obj or {}
    return SpendoClient(
        base_url=payload.get("base_url"),
        timeout_seconds=payload.get("timeout"),
        backend=payload.get("backend"),
    )


def require_codes(client: SpendoClient) -> ReferenceCodeCache:
    """Load reference codes or abort when they are unavailable."""
    cache = client.load_codes()
    if not cache.is_ready():
        raise click.ClickException(cache.error or "Reference codes are unavailable.")
    return cache
