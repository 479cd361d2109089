"""rulebook CLI entrypoint."""

from __future__ import annotations

import click

from rulebook import __version__


@click.group()
@click.version_option(version=__version__, prog_name="rulebook")
def main() -> None:
    """rulebook — serve coding rules and prompt templates over MCP stdio."""


# Register subcommands
from rulebook.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
