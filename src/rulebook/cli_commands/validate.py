"""``rulebook validate`` — check that a catalog loads and summarise it."""

from __future__ import annotations

from collections import Counter

import click
from rich.markup import escape

from rulebook.cli_commands._output import config_option, console, load_catalog


@click.command()
@config_option
def validate(config_path: str | None) -> None:
    """Load the catalog and report what the server would expose."""
    from rulebook.config.loader import ConfigLoader

    path = ConfigLoader(config_path).path
    config = load_catalog(config_path)

    console.print("[green]Catalog validated successfully.[/green]")
    console.print(f"  File: {escape(str(path))}", highlight=False)
    console.print(f"  Server: {escape(config.server.name)} {escape(config.server.version)}", highlight=False)
    console.print(f"  Tools: {len(config.tools)}")
    console.print(f"  Prompts: {len(config.prompts)}")

    # Lookups are first-match, so later duplicates are unreachable.
    for kind, names in (
        ("tool", [t.name for t in config.tools]),
        ("prompt", [p.name for p in config.prompts]),
    ):
        for name, count in Counter(names).items():
            if count > 1:
                console.print(
                    f"[yellow]Warning:[/yellow] {kind} '{escape(name)}' is defined {count} times; "
                    "only the first definition is used."
                )
