"""``dsro topology`` — show the gossip topology a run specification builds."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from dsro.cli_commands._output import console, print_topology


@click.command("topology")
@click.argument("runspec", type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def topology_cmd(runspec: str, as_json: bool) -> None:
    """Print the neighbor relation of the topology in RUNSPEC."""
    from dsro.sdk.runspec import RunSpecLoader

    try:
        spec = RunSpecLoader(Path(runspec)).load()
        topology = spec.gossip.topology.build(spec.problem.size)
    except Exception as exc:
        console.print(f"[red]Error building topology:[/red] {exc}")
        sys.exit(1)

    print_topology(topology, as_json=as_json)
