"""``rulebook prompts`` — list the catalog's prompts and render them locally."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from rulebook.cli_commands._output import (
    config_option,
    console,
    err_console,
    load_catalog,
    print_prompts_table,
)


def _parse_arguments(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", ctx=ctx, param=param)
        arguments[key] = value
    return arguments


@click.group()
def prompts() -> None:
    """List and render prompts."""


@prompts.command("list")
@config_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def list_prompts(config_path: str | None, as_json: bool) -> None:
    """List the prompts advertised by ``prompts/list``."""
    from rulebook.config.loader import build_prompt_descriptors

    descriptors = build_prompt_descriptors(load_catalog(config_path))
    if not descriptors:
        console.print("[yellow]No prompts configured.[/yellow]")
        return

    print_prompts_table(descriptors, as_json=as_json)


@prompts.command("render")
@click.argument("name")
@config_option
@click.option(
    "--arg",
    "-a",
    "arguments",
    multiple=True,
    callback=_parse_arguments,
    help="Prompt argument as KEY=VALUE (repeatable).",
)
def render_prompt(name: str, config_path: str | None, arguments: dict[str, str]) -> None:
    """Render prompt NAME exactly as ``prompts/get`` would."""
    from rulebook.content.resolver import resolve_prompt

    result = resolve_prompt(load_catalog(config_path), name, arguments)
    if result is None:
        err_console.print(f"[red]Unknown prompt:[/red] {escape(name)}", highlight=False)
        sys.exit(1)

    click.echo(result.messages[0].content.text)
