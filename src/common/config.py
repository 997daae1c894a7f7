"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .models import ListingOrder

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
CONTENT_DIR = PROJECT_ROOT / "content"
PUBLIC_DIR = PROJECT_ROOT / "public"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ContentSettings(BaseModel):
    """Where articles live and how their bodies are scanned."""
    content_dir: str = str(CONTENT_DIR)
    file_pattern: str = "*.md"
    diagram_languages: list[str] = Field(default_factory=lambda: ["mermaid"])


class ListingSettings(BaseModel):
    """Ordering policy for listing pages."""
    model_config = ConfigDict(validate_assignment=True)

    order: ListingOrder = ListingOrder.NEWEST_FIRST


class SiteSettings(BaseModel):
    """Rendered site output settings."""
    output_dir: str = str(PUBLIC_DIR)
    title: str = "Engineering Notes"
    base_url: str = "/"
    language: str = "en"


class Settings(BaseModel):
    """Top-level application settings."""
    content: ContentSettings = Field(default_factory=ContentSettings)
    listing: ListingSettings = Field(default_factory=ListingSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables BLOG_CONTENT_DIR, BLOG_OUTPUT_DIR and
        BLOG_LISTING_ORDER override the file.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        loaded = cls(**data)
        return loaded.with_env_overrides()

    def with_env_overrides(self) -> Settings:
        """Return a copy with BLOG_* environment variables applied."""
        updated = self.model_copy(deep=True)
        content_dir = os.getenv("BLOG_CONTENT_DIR", "")
        if content_dir:
            updated.content.content_dir = content_dir
        output_dir = os.getenv("BLOG_OUTPUT_DIR", "")
        if output_dir:
            updated.site.output_dir = output_dir
        order = os.getenv("BLOG_LISTING_ORDER", "")
        if order:
            updated.listing.order = order
        return updated


# Singleton settings instance
settings = Settings.load()
