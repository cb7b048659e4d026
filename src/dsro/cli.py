"""dsro CLI entrypoint."""

from __future__ import annotations

import click

from dsro import __version__


@click.group()
@click.version_option(version=__version__, prog_name="dsro")
def main() -> None:
    """dsro — decentralized stochastic resource optimization."""


# Register subcommands
from dsro.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
