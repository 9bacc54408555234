"""Retro CLI -- runs the demonstration programs from the terminal.

This module is NEVER imported from retro/__init__.py.
It is only loaded via the ``retro`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install retro[cli]"
    ) from None


@click.group()
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    envvar="RETRO_VERBOSE",
    help="Log every retry decision.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Retro: retry operations according to the errors they raise."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        # basicConfig is a no-op when the root logger already has handlers
        logging.getLogger("retro").setLevel(logging.DEBUG)


# Register subcommands after cli group is defined
from retro.cli.commands.insert import insert  # noqa: E402
from retro.cli.commands.network import network  # noqa: E402

cli.add_command(insert)
cli.add_command(network)
