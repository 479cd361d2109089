"""Config error types."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when the catalog YAML cannot be found, parsed or validated."""
