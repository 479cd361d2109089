"""Content resolver — turn tool and prompt names into MCP result payloads.

Lookups return ``None`` when the name is not in the catalog; mapping that
to a protocol error is the dispatcher's job.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rulebook.content.template import apply_defaults, render
from rulebook.protocol.models import PromptMessage, PromptResult, TextContent, ToolCallResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rulebook.config.models import CatalogConfig, PromptConfig, ToolConfig, ToolContent

logger = logging.getLogger(__name__)


def build_markdown(content: ToolContent) -> str:
    """Synthesise markdown from a structured tool content block.

    Layout: ``### title``, intro paragraph, numbered bold-named rules, then
    an emphasised footer under a ``---`` rule.  Missing optional parts
    contribute no lines.
    """
    parts: list[str] = []
    if content.title is not None:
        parts += [f"### {content.title}", ""]
    if content.intro is not None:
        parts += [content.intro, ""]
    for index, rule in enumerate(content.rules, start=1):
        parts.append(f"{index}.  **{rule.name}:** {rule.description}")
    if content.footer is not None:
        parts += ["", "---", f"*{content.footer}*"]
    return "\n".join(parts)


def tool_markdown(tool: ToolConfig) -> str:
    """Return the tool's precomputed markdown, or synthesise it."""
    if tool.content.markdown is not None:
        return tool.content.markdown
    return build_markdown(tool.content)


def render_prompt(prompt: PromptConfig, arguments: Mapping[str, Any]) -> str:
    """Default-fill *arguments* against the prompt's declaration and render it."""
    variables = apply_defaults(arguments, prompt.arguments)
    return render(prompt.template, variables)


def resolve_tool(catalog: CatalogConfig, name: str) -> ToolCallResult | None:
    tool = catalog.find_tool(name)
    if tool is None:
        logger.debug("No tool named %r in catalog", name)
        return None
    return ToolCallResult(content=[TextContent(text=tool_markdown(tool))])


def resolve_prompt(
    catalog: CatalogConfig, name: str, arguments: Mapping[str, Any]
) -> PromptResult | None:
    prompt = catalog.find_prompt(name)
    if prompt is None:
        logger.debug("No prompt named %r in catalog", name)
        return None
    text = render_prompt(prompt, arguments)
    return PromptResult(messages=[PromptMessage(role="user", content=TextContent(text=text))])


class ContentResolver:
    """Bind :func:`resolve_tool` and :func:`resolve_prompt` to one catalog."""

    def __init__(self, catalog: CatalogConfig) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> CatalogConfig:
        return self._catalog

    def resolve_tool(self, name: str) -> ToolCallResult | None:
        return resolve_tool(self._catalog, name)

    def resolve_prompt(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> PromptResult | None:
        return resolve_prompt(self._catalog, name, arguments or {})
