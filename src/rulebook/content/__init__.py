"""Content layer — template rendering and tool/prompt resolution."""

from rulebook.content.resolver import (
    ContentResolver,
    build_markdown,
    render_prompt,
    resolve_prompt,
    resolve_tool,
    tool_markdown,
)
from rulebook.content.template import apply_defaults, is_truthy, render

__all__ = [
    "ContentResolver",
    "apply_defaults",
    "build_markdown",
    "is_truthy",
    "render",
    "render_prompt",
    "resolve_prompt",
    "resolve_tool",
    "tool_markdown",
]
