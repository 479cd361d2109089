"""Shared CLI output formatters and catalog loading."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rulebook.config.errors import ConfigError
from rulebook.config.loader import ConfigLoader

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rulebook.config.models import CatalogConfig, PromptDescriptor, ToolDescriptor

console = Console()
err_console = Console(stderr=True)

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Catalog YAML file (defaults to $RULEBOOK_CONFIG, ~/.rulebook.yml, ./.rulebook.yml).",
)


def load_catalog(config_path: str | None) -> CatalogConfig:
    """Load the catalog or report the error on stderr and exit 1."""
    try:
        return ConfigLoader(config_path).load()
    except ConfigError as exc:
        err_console.print(f"[red]**ERROR**:[/red] {escape(str(exc))}", highlight=False)
        sys.exit(1)


def print_tools_table(tools: Sequence[ToolDescriptor], *, as_json: bool = False) -> None:
    """Pretty-print tool descriptors as a table."""
    if as_json:
        console.print_json(json.dumps([t.to_wire() for t in tools]))
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for tool in tools:
        table.add_row(tool.name, _truncate(tool.description))

    console.print(table)


def print_prompts_table(prompts: Sequence[PromptDescriptor], *, as_json: bool = False) -> None:
    """Pretty-print prompt descriptors with their arguments."""
    if as_json:
        console.print_json(json.dumps([p.to_wire() for p in prompts]))
        return

    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")
    table.add_column("Description")

    for prompt in prompts:
        args = ", ".join(
            arg.name if arg.required else escape(f"[{arg.name}]") for arg in prompt.arguments
        )
        table.add_row(prompt.name, args or "-", _truncate(prompt.description))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
