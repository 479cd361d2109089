"""``rulebook tools`` — list the catalog's tools and preview their content."""

from __future__ import annotations

import sys

import click
from rich.markdown import Markdown
from rich.markup import escape

from rulebook.cli_commands._output import (
    config_option,
    console,
    err_console,
    load_catalog,
    print_tools_table,
)


@click.group()
def tools() -> None:
    """List and preview tools."""


@tools.command("list")
@config_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def list_tools(config_path: str | None, as_json: bool) -> None:
    """List the tools advertised by ``tools/list``."""
    from rulebook.config.loader import build_manifest

    manifest = build_manifest(load_catalog(config_path))
    if not manifest.tools:
        console.print("[yellow]No tools configured.[/yellow]")
        return

    print_tools_table(manifest.tools, as_json=as_json)


@tools.command("show")
@click.argument("name")
@config_option
@click.option("--raw", is_flag=True, help="Print the markdown source instead of rendering it.")
def show_tool(name: str, config_path: str | None, raw: bool) -> None:
    """Show the content ``tools/call`` returns for tool NAME."""
    from rulebook.content.resolver import resolve_tool

    result = resolve_tool(load_catalog(config_path), name)
    if result is None:
        err_console.print(f"[red]Unknown tool:[/red] {escape(name)}", highlight=False)
        sys.exit(1)

    text = result.content[0].text
    if raw:
        click.echo(text)
    else:
        console.print(Markdown(text))
