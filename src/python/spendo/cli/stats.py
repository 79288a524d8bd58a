"""Expenditure statistics CLI command."""

from __future__ import annotations

import datetime as dt

import click

from spendo.cli.common import format_amount, get_client, parse_date
from spendo.exceptions import NetworkError, NotFoundError, ValidationError


@click.command("stats")
@click.option("--start-date", default=None, help="Start date in YYYY-MM-DD (defaults to today).")
@click.option("--end-date", default=None, help="End date in YYYY-MM-DD (defaults to today).")
@click.pass_context
def stats(ctx: click.Context, start_date: str | None, end_date: str | None) -> None:
    """Show expenditure totals per title for a date range."""
    start = parse_date(start_date, "--start-date") or dt.date.today()
    end = parse_date(end_date, "--end-date") or dt.date.today()
    with get_client(ctx) as client:
        try:
            records = client.expenditure(start, end)
        except (NetworkError, NotFoundError, ValidationError) as e:
            raise click.ClickException(f"Statistics unavailable: {e}")

    if not records:
        click.echo("No expenditure found.")
        return
    width = max([len(record.name) for record in records] + [1])
    for record in records:
        click.echo(f"{record.name:<{width}}  {format_amount(record.amount):>12}")
    click.echo(f"Max: {format_amount(max(record.amount for record in records))}")
