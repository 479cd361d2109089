"""Catalog configuration — YAML loading and pydantic models."""

from rulebook.config.errors import ConfigError
from rulebook.config.loader import (
    ConfigLoader,
    build_manifest,
    build_prompt_descriptors,
    find_config_path,
)
from rulebook.config.models import (
    ArgumentSpec,
    CatalogConfig,
    PromptConfig,
    PromptDescriptor,
    RuleEntry,
    ServerInfo,
    ServerManifest,
    ToolConfig,
    ToolContent,
    ToolDescriptor,
)

__all__ = [
    "ArgumentSpec",
    "CatalogConfig",
    "ConfigError",
    "ConfigLoader",
    "PromptConfig",
    "PromptDescriptor",
    "RuleEntry",
    "ServerInfo",
    "ServerManifest",
    "ToolConfig",
    "ToolContent",
    "ToolDescriptor",
    "build_manifest",
    "build_prompt_descriptors",
    "find_config_path",
]
