"""Spendo CLI entry point."""

from __future__ import annotations

import click

from spendo.__version__ import __version__
from spendo.cli.codes import codes
from spendo.cli.entry import entry
from spendo.cli.stats import stats


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="spendo")
@click.option("--base-url", default=None, help="Ledger service base URL.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.pass_context
def main(ctx: click.Context, base_url: str | None, timeout: float | None) -> None:
    """Spendo CLI entry point."""
    ctx.ensure_object(dict)
    ctx.obj.update({"base_url": base_url, "timeout": timeout})


main.add_command(codes)
main.add_command(entry)
main.add_command(stats)


if __name__ == "__main__":
    main()
