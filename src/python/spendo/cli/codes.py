"""Reference code CLI commands."""

from __future__ import annotations

import click

from spendo.cli.common import get_client, require_codes


@click.command("codes")
@click.pass_context
def codes(ctx: click.Context) -> None:
    """List transaction type and payment type codes.

    Examples:
        spendo codes
    """
    with get_client(ctx) as client:
        cache = require_codes(client)

    for title, collection in (
        ("Transaction types", cache.type_codes()),
        ("Payment types", cache.payment_codes()),
    ):
        click.echo(f"\n{title}:")
        click.echo("-" * 40)
        if not collection:
            click.echo("(none)")
        for item in collection:
            click.echo(f"{item.code:<10} {item.name}")
