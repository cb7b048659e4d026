"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from dsro.cli_commands.solve import solve
    from dsro.cli_commands.topology import topology_cmd

    cli.add_command(solve)
    cli.add_command(topology_cmd)
