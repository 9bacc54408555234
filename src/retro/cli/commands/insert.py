"""retro insert -- store integers under random keys, retrying collisions."""

from __future__ import annotations

import random

import click

from retro.cli.formatting import format_fatal, format_insert_summary, get_console


@click.command()
@click.option("-n", "--count", default=100, type=click.IntRange(min=0), help="How many integers to store.")
@click.option(
    "--key-space",
    default=None,
    type=click.IntRange(min=1),
    help="Draw keys from this many values instead of UUIDs (forces collisions).",
)
@click.option("--seed", default=None, type=int, envvar="RETRO_SEED", help="Seed for --key-space keys.")
def insert(count: int, key_space: int | None, seed: int | None) -> None:
    """Store COUNT integers under unique random keys."""
    from retro.demo.insert import store_all, uuid_key

    console = get_console()
    if key_space is None:
        key_factory = uuid_key
    else:
        rng = random.Random(seed)

        def key_factory() -> str:
            return str(rng.randrange(key_space))

    try:
        data = store_all(count, key_factory=key_factory)
    except Exception as e:
        format_fatal(f"Failed to store values: {e}", console)
        raise SystemExit(1) from None

    format_insert_summary(data, console)
