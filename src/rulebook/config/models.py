"""Pydantic models for the catalog YAML consumed by ``rulebook serve``.

The catalog has three top-level sections::

    server:
      name: RubyCodingRules
      version: 1.0.0
    tools:
      - name: get_coding_rules
        description: ...
        inputSchema: {type: object, properties: {}}
        content:
          title: ...
          rules: [{name: ..., description: ...}]
    prompts:
      - name: code_review
        arguments: [{name: code, required: true}]
        template: "Review {{code}}"

Only presence is checked; unknown keys are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


def _empty_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


class ServerInfo(BaseModel):
    """Server identity reported on ``initialize``."""

    model_config = {"coerce_numbers_to_str": True}

    name: str
    version: str


class RuleEntry(BaseModel):
    """One numbered rule in a structured tool content block."""

    name: str
    description: str = ""


class ToolContent(BaseModel):
    """Tool body: either pre-rendered markdown or a structured rule list."""

    markdown: str | None = None
    title: str | None = None
    intro: str | None = None
    rules: list[RuleEntry] = []
    footer: str | None = None


class ToolDescriptor(BaseModel):
    """A tool as advertised by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: Any = Field(default_factory=_empty_schema, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolConfig(BaseModel):
    """Full tool record, including the content it returns."""

    model_config = {"populate_by_name": True}

    name: str
    description: str = ""
    input_schema: Any = Field(default_factory=_empty_schema, alias="inputSchema")
    content: ToolContent = Field(default_factory=ToolContent)

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )


class ArgumentSpec(BaseModel):
    """A declared prompt argument (``required`` is informational)."""

    model_config = {"frozen": True}

    name: str
    required: bool = False
    description: str = ""


class PromptDescriptor(BaseModel):
    """A prompt as advertised by ``prompts/list``."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    arguments: tuple[ArgumentSpec, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump()
        data["arguments"] = list(data["arguments"])
        return data


class PromptConfig(BaseModel):
    """Full prompt record, including its template text."""

    name: str
    description: str = ""
    arguments: list[ArgumentSpec] = []
    template: str = ""

    def descriptor(self) -> PromptDescriptor:
        return PromptDescriptor(
            name=self.name,
            description=self.description,
            arguments=tuple(self.arguments),
        )


class CatalogConfig(BaseModel):
    """Top-level catalog parsed from YAML."""

    server: ServerInfo
    tools: list[ToolConfig] = []
    prompts: list[PromptConfig] = []

    def find_tool(self, name: str) -> ToolConfig | None:
        return next((t for t in self.tools if t.name == name), None)

    def find_prompt(self, name: str) -> PromptConfig | None:
        return next((p for p in self.prompts if p.name == name), None)


class ServerManifest(BaseModel):
    """Server identity plus tool descriptors, built once at startup."""

    model_config = {"frozen": True}

    name: str
    version: str
    tools: tuple[ToolDescriptor, ...] = ()
