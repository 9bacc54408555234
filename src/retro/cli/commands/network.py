"""retro network -- fetch and use a simulated flaky server."""

from __future__ import annotations

import random
import time

import click

from retro.cli.formatting import format_fatal, format_network_summary, get_console


def _no_sleep(seconds: float) -> None:
    """Skip real waiting; retry decisions are unchanged."""


@click.command()
@click.option("--server-id", default="abc123", help="Server to query.")
@click.option("--seed", default=None, type=int, envvar="RETRO_SEED", help="Seed for simulated failures.")
@click.option(
    "--failure-rate",
    default=0.2,
    type=click.FloatRange(0.0, 1.0),
    help="Probability of each simulated failure.",
)
@click.option("--no-wait", is_flag=True, help="Do not actually sleep between retries.")
def network(server_id: str, seed: int | None, failure_rate: float, no_wait: bool) -> None:
    """Get a server's version and use it, retrying transient failures."""
    from retro.demo.network import ServerSimulation

    console = get_console()
    sim = ServerSimulation(
        random.Random(seed),
        failure_rate=failure_rate,
        sleep=_no_sleep if no_wait else time.sleep,
    )
    try:
        version = sim.fetch_version(server_id)
    except Exception as e:
        format_fatal(f"Failed to get server info {server_id}: {e}", console)
        raise SystemExit(1) from None

    try:
        sim.use(server_id, version)
    except Exception as e:
        format_fatal(f"Failed to use server {server_id}: {e}", console)
        raise SystemExit(1) from None

    format_network_summary(server_id, version, sim.calls, console)
