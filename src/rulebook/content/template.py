"""Template engine — conditional blocks, variable substitution, cleanup.

Templates use a small mustache-like syntax::

    Review this {{language}} code.
    {{#if focus_areas}}Focus on: {{focus_areas}}{{/if}}

Rendering runs three passes in a fixed order: conditional blocks are
resolved first, then ``{{key}}`` markers are substituted, and finally any
marker left over (an unknown variable) is deleted.  The engine never
raises on malformed input; anything it cannot interpret degrades to
deletion or is left as plain text.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rulebook.config.models import ArgumentSpec

_CONDITIONAL_RE = re.compile(r"\{\{#if\s+(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL)
_MARKER_RE = re.compile(r"\{\{([^}]+)\}\}")

# Placeholder values assigned to omitted arguments.  They count as "unset"
# inside ``{{#if}}`` blocks.
SENTINEL_VALUES = frozenset({"auto-detect", "general"})

DEFAULT_VALUES: dict[str, str] = {
    "focus_areas": "general",
    "language": "auto-detect",
    "format": "markdown",
}


def stringify(value: Any) -> str:
    """Return the string form of a variable value."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def is_truthy(value: Any) -> bool:
    """Whether a ``{{#if}}`` block guarded by *value* should be kept."""
    if value is None:
        return False
    text = stringify(value)
    return bool(text) and text not in SENTINEL_VALUES


def default_value_for(name: str) -> str:
    return DEFAULT_VALUES.get(name, "")


def apply_defaults(
    arguments: Mapping[str, Any], specs: Iterable[ArgumentSpec]
) -> dict[str, Any]:
    """Fill every declared argument the caller left out (or sent as null).

    Returns a new mapping; *arguments* is not modified.  Values for
    undeclared names are passed through untouched.
    """
    variables = dict(arguments)
    for arg in specs:
        if variables.get(arg.name) is None:
            variables[arg.name] = default_value_for(arg.name)
    return variables


def process_conditionals(template: str, variables: Mapping[str, Any]) -> str:
    def _collapse(match: re.Match[str]) -> str:
        name, body = match.group(1), match.group(2)
        return body if is_truthy(variables.get(name)) else ""

    return _CONDITIONAL_RE.sub(_collapse, template)


def replace_variables(template: str, variables: Mapping[str, Any]) -> str:
    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in variables:
            return stringify(variables[key])
        return match.group(0)

    return _MARKER_RE.sub(_substitute, template)


def cleanup_remaining_variables(template: str) -> str:
    return _MARKER_RE.sub("", template)


def render(template: str, variables: Mapping[str, Any]) -> str:
    """Render *template* with *variables*.

    Args:
        template: Template text using ``{{key}}`` and ``{{#if key}}...{{/if}}``.
        variables: Variable name to value.  Non-string values are stringified.

    Returns:
        The rendered text.  Markers naming unknown variables are removed.
    """
    result = process_conditionals(template, variables)
    result = replace_variables(result, variables)
    return cleanup_remaining_variables(result)
