# Publisher — Listing, rendering and integrity checks for blog articles
"""
Publisher module for turning loaded articles into a static site.

Handles draft filtering and date ordering of listings, Markdown-to-HTML
conversion (fenced code and diagram blocks), Jinja2 page rendering, the
full build, and content integrity checks.
"""

from .builder import BuildResult, SiteBuilder
from .listing import ListingOrder, build_listing, find_by_slug, published
from .renderer import MarkdownConverter, SiteRenderer, render_markdown
from .validator import ContentValidator, ValidationResult

__all__ = [
    "BuildResult",
    "ContentValidator",
    "ListingOrder",
    "MarkdownConverter",
    "SiteBuilder",
    "SiteRenderer",
    "ValidationResult",
    "build_listing",
    "find_by_slug",
    "published",
    "render_markdown",
]
