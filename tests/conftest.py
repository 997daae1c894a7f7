"""Shared test fixtures for the blog content engine."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fixtures.sample_posts import write_sample_posts
from src.common.config import Settings
from src.content.loader import DocumentLoader


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """A temporary content directory holding well-formed sample posts."""
    return write_sample_posts(tmp_path / "content")


@pytest.fixture
def broken_content_dir(tmp_path) -> Path:
    """Sample posts plus two malformed ones."""
    return write_sample_posts(tmp_path / "content", include_broken=True)


@pytest.fixture
def loader(content_dir) -> DocumentLoader:
    return DocumentLoader(content_dir, pattern="*.md", diagram_languages=["mermaid"])


@pytest.fixture
def test_settings(content_dir, tmp_path) -> Settings:
    """Settings pointing at the temporary content and output directories."""
    config = Settings()
    config.content.content_dir = str(content_dir)
    config.site.output_dir = str(tmp_path / "public")
    config.site.title = "Test Notes"
    return config
