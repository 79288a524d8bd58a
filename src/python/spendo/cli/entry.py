"""Ledger entry CLI commands."""

from __future__ import annotations

import datetime as dt

import click

from spendo.cli.common import (
    format_amount,
    format_entry,
    get_client,
    parse_date,
    require_codes,
)
from spendo.exceptions import NetworkError, NotFoundError, ValidationError
from spendo.listing import ListState, ListSyncController
from spendo.modals import CreateModal, DetailModal
from spendo.models import ALL, FilterCriteria


@click.group()
def entry() -> None:
    """Ledger entry commands."""


@entry.command("list")
@click.option("--start-date", default=None, help="Start date in YYYY-MM-DD (defaults to today).")
@click.option("--end-date", default=None, help="End date in YYYY-MM-DD (defaults to today).")
@click.option("--title", default="", help="Match entries whose title contains this text.")
@click.option("--type", "transaction_type", default=ALL, show_default=True, help="Transaction type code.")
@click.option("--payment", "payment_type", default=ALL, show_default=True, help="Payment type code.")
@click.pass_context
def list_entries(
    ctx: click.Context,
    start_date: str | None,
    end_date: str | None,
    title: str,
    transaction_type: str,
    payment_type: str,
) -> None:
    """List entries matching the filters."""
    today = dt.date.today()
    criteria = FilterCriteria(
        start_date=parse_date(start_date, "--start-date") or today,
        end_date=parse_date(end_date, "--end-date") or today,
        title=title,
        transaction_type=transaction_type,
        payment_type=payment_type,
    )
    with get_client(ctx) as client:
        screen = client.search_screen()
        screen.criteria = criteria
        screen.mount()

    if screen.entries.state is ListState.ERROR:
        raise click.ClickException(screen.entries.notice)
    if screen.entries.is_empty:
        click.echo("No entries found.")
        return
    for record in screen.entries.rows:
        click.echo(format_entry(record, screen.codes))


@entry.command("get")
@click.argument("key", type=int)
@click.pass_context
def get_entry(ctx: click.Context, key: int) -> None:
    """Show the details of an entry."""
    with get_client(ctx) as client:
        codes = client.load_codes()
        detail = DetailModal(client.backend)
        try:
            record = detail.show(key)
        except (NotFoundError, NetworkError, ValidationError):
            raise click.ClickException(detail.error)

    click.echo(f"Number:  {record.key}")
    click.echo(f"Date:    {record.date.isoformat()}")
    click.echo(f"Title:   {record.title}")
    click.echo(f"Content: {record.content}")
    click.echo(f"Type:    {codes.type_name(record.transaction_type)}")
    click.echo(f"Amount:  {format_amount(record.amount)}")
    click.echo(f"Payment: {codes.payment_name(record.payment_type)}")


@entry.command("add")
@click.option("--date", "date_value", default=None, help="Entry date in YYYY-MM-DD (defaults to today).")
@click.option("--title", required=True, help="Entry title.")
@click.option("--amount", required=True, help="Amount in the smallest currency unit.")
@click.option("--content", default="", help="Memo for the entry.")
@click.option("--type", "transaction_type", default=None, help="Transaction type code (defaults to the first code).")
@click.option("--payment", "payment_type", default=None, help="Payment type code (defaults to the first code).")
@click.pass_context
def add_entry(
    ctx: click.Context,
    date_value: str | None,
    title: str,
    amount: str,
    content: str,
    transaction_type: str | None,
    payment_type: str | None,
) -> None:
    """Add an entry."""
    date = parse_date(date_value, "--date") or dt.date.today()
    with get_client(ctx) as client:
        codes = require_codes(client)
        form = CreateModal(client.backend, codes)
        form.open_for(date)
        form.update_field("title", title)
        form.update_field("content", content)
        form.update_field("amount", amount)
        if transaction_type is not None:
            form.update_field("transaction_type", transaction_type)
        if payment_type is not None:
            form.update_field("payment_type", payment_type)
        try:
            form.save()
        except ValidationError as e:
            raise click.ClickException(f"Entry add failed: {e}")
        except (NotFoundError, NetworkError) as e:
            raise click.ClickException(f"{form.error} {e}")

    if form.created_key is None:
        click.echo("Added entry")
    else:
        click.echo(f"Added entry {form.created_key}")


@entry.command("update")
@click.argument("key", type=int)
@click.option("--date", "date_value", default=None, help="Updated date in YYYY-MM-DD.")
@click.option("--title", default=None, help="Updated title.")
@click.option("--content", default=None, help="Updated memo.")
@click.option("--amount", default=None, help="Updated amount.")
@click.option("--type", "transaction_type", default=None, help="Updated transaction type code.")
@click.option("--payment", "payment_type", default=None, help="Updated payment type code.")
@click.pass_context
def update_entry(
    ctx: click.Context,
    key: int,
    date_value: str | None,
    title: str | None,
    content: str | None,
    amount: str | None,
    transaction_type: str | None,
    payment_type: str | None,
) -> None:
    """Update an entry."""
    changes = {
        "date": parse_date(date_value, "--date"),
        "title": title,
        "content": content,
        "amount": amount,
        "transaction_type": transaction_type,
        "payment_type": payment_type,
    }
    changes = {name: value for name, value in changes.items() if value is not None}
    if not changes:
        raise click.UsageError(
            "Provide --date, --title, --content, --amount, --type, or --payment."
        )
    with get_client(ctx) as client:
        screen = client.search_screen()
        screen.codes.load()
        if not screen.codes.is_ready():
            raise click.ClickException(screen.codes.error)
        try:
            screen.editor.begin(key)
        except (NotFoundError, NetworkError, ValidationError):
            raise click.ClickException(screen.editor.error)
        for name, value in changes.items():
            screen.editor.update_field(name, value)
        try:
            screen.editor.save()
        except ValidationError as e:
            raise click.ClickException(f"Entry update failed: {e}")
        except (NotFoundError, NetworkError) as e:
            raise click.ClickException(f"{screen.editor.error} {e}")
    click.echo(f"Updated entry {key}")


@entry.command("delete")
@click.argument("key", type=int)
@click.option("--yes", is_flag=True, help="Skip delete confirmation.")
@click.pass_context
def delete_entry(ctx: click.Context, key: int, yes: bool) -> None:
    """Delete an entry."""
    with get_client(ctx) as client:
        entries = ListSyncController(client.backend)
        deleted = entries.delete_entry(
            key, confirm=lambda: yes or click.confirm("Delete entry?", default=False)
        )
    if deleted:
        click.echo(f"Deleted entry {key}")
    elif entries.notice:
        raise click.ClickException(entries.notice)
    else:
        click.echo("Delete cancelled.")
