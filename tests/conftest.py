"""Shared fixtures: a small catalog used across the test suite."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

import pytest
import yaml

from rulebook.config.models import CatalogConfig
from rulebook.server.context import ServerContext
from rulebook.server.dispatcher import RequestDispatcher

if TYPE_CHECKING:
    from pathlib import Path

CATALOG_DATA: dict[str, Any] = {
    "server": {"name": "TestServer", "version": "1.2.3"},
    "tools": [
        {
            "name": "rules",
            "description": "Coding rules",
            "inputSchema": {"type": "object", "properties": {}},
            "content": {
                "title": "Rules",
                "intro": "Follow these.",
                "rules": [
                    {"name": "Small", "description": "Keep it small."},
                    {"name": "Clear", "description": "Name things well."},
                ],
                "footer": "Be kind.",
            },
        },
        {
            "name": "notes",
            "description": "Notes",
            "content": {"markdown": "# Notes\n\nPlain text."},
        },
    ],
    "prompts": [
        {
            "name": "code_review",
            "description": "Review code",
            "arguments": [
                {"name": "code", "required": True, "description": "Code to review"},
                {"name": "language"},
                {"name": "focus_areas"},
            ],
            "template": (
                "Review:\n{{code}}"
                "{{#if language}}\nLanguage: {{language}}{{/if}}"
                "{{#if focus_areas}}\nFocus: {{focus_areas}}{{/if}}"
            ),
        },
    ],
}

RULES_MARKDOWN = (
    "### Rules\n"
    "\n"
    "Follow these.\n"
    "\n"
    "1.  **Small:** Keep it small.\n"
    "2.  **Clear:** Name things well.\n"
    "\n"
    "---\n"
    "*Be kind.*"
)


@pytest.fixture
def catalog_data() -> dict[str, Any]:
    return copy.deepcopy(CATALOG_DATA)


@pytest.fixture
def catalog(catalog_data: dict[str, Any]) -> CatalogConfig:
    return CatalogConfig.model_validate(catalog_data)


@pytest.fixture
def context(catalog: CatalogConfig) -> ServerContext:
    return ServerContext.from_config(catalog)


@pytest.fixture
def dispatcher(context: ServerContext) -> RequestDispatcher:
    return RequestDispatcher(context)


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_data: dict[str, Any]) -> Path:
    path = tmp_path / "rulebook.yml"
    path.write_text(yaml.safe_dump(catalog_data, sort_keys=False), encoding="utf-8")
    return path
