"""Catalog loading — locate, read and validate the YAML catalog.

Typical usage::

    config = ConfigLoader().load()
    manifest = build_manifest(config)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rulebook.config.errors import ConfigError
from rulebook.config.models import CatalogConfig, PromptDescriptor, ServerManifest

CONFIG_ENV_VAR = "RULEBOOK_CONFIG"
CONFIG_FILENAME = ".rulebook.yml"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "rulebook.yml"


def find_config_path() -> Path:
    """Return the first catalog that exists.

    Search order: ``$RULEBOOK_CONFIG``, ``~/.rulebook.yml``,
    ``./.rulebook.yml``, then the catalog bundled with the package.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    try:
        home_config = Path.home() / CONFIG_FILENAME
    except RuntimeError:
        # No resolvable home directory.
        home_config = None
    if home_config is not None and home_config.is_file():
        return home_config

    local_config = Path.cwd() / CONFIG_FILENAME
    if local_config.is_file():
        return local_config

    return DEFAULT_CONFIG_PATH


class ConfigLoader:
    """Load and validate a catalog YAML file into a :class:`CatalogConfig`."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else None

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else find_config_path()

    def load(self) -> CatalogConfig:
        """Read YAML, interpolate env vars in the server identity, and validate.

        Raises:
            ConfigError: If the file is missing, unreadable, not valid YAML,
                not a mapping, or fails schema validation.
        """
        path = self.path
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to load config file: {exc}") from exc

        try:
            data: Any = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse config file: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Failed to load config file: {path} must contain a mapping")

        # Only server identity is interpolated; tool and prompt text is served as written.
        server = data.get("server")
        if isinstance(server, dict):
            for key in ("name", "version"):
                if isinstance(server.get(key), str):
                    server[key] = os.path.expandvars(server[key])

        try:
            return CatalogConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Failed to load config file: {exc}") from exc


def build_manifest(config: CatalogConfig) -> ServerManifest:
    """Summarise server identity and tool descriptors."""
    return ServerManifest(
        name=config.server.name,
        version=config.server.version,
        tools=tuple(tool.descriptor() for tool in config.tools),
    )


def build_prompt_descriptors(config: CatalogConfig) -> tuple[PromptDescriptor, ...]:
    return tuple(prompt.descriptor() for prompt in config.prompts)
