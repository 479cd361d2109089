"""ServerContext — the read-only state a server holds for its lifetime."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rulebook.config.loader import build_manifest, build_prompt_descriptors
from rulebook.content.resolver import ContentResolver

if TYPE_CHECKING:
    from rulebook.config.models import CatalogConfig, PromptDescriptor, ServerManifest


@dataclass(frozen=True)
class ServerContext:
    """Manifest, prompt descriptors and resolver, built once at startup."""

    manifest: ServerManifest
    prompts: tuple[PromptDescriptor, ...]
    resolver: ContentResolver

    @classmethod
    def from_config(cls, config: CatalogConfig) -> ServerContext:
        # Detach from the caller's object so later edits cannot leak in.
        catalog = config.model_copy(deep=True)
        return cls(
            manifest=build_manifest(catalog),
            prompts=build_prompt_descriptors(catalog),
            resolver=ContentResolver(catalog),
        )
