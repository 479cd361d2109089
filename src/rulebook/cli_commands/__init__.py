"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from rulebook.cli_commands.prompts import prompts
    from rulebook.cli_commands.serve import serve
    from rulebook.cli_commands.tools import tools
    from rulebook.cli_commands.validate import validate

    cli.add_command(serve)
    cli.add_command(tools)
    cli.add_command(prompts)
    cli.add_command(validate)
