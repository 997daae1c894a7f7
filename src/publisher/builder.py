"""Site builder — content directory to rendered HTML pages.

Orchestrates the complete flow:
Markdown files → DocumentLoader → listing (drafts filtered, date ordered)
→ SiteRenderer → files under the output directory

Usage:
    builder = SiteBuilder()
    result = builder.build(Path("public"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.common.config import Settings, settings as default_settings
from src.common.logging import setup_logging
from src.content.loader import DocumentLoader, LoadFailure

from .listing import ListingOrder, build_listing
from .renderer import SiteRenderer

logger = setup_logging(module_name="publisher.builder")


@dataclass
class BuildResult:
    """Result of a site build."""
    output_dir: str = ""
    pages: list[str] = field(default_factory=list)
    skipped_drafts: list[str] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


class SiteBuilder:
    """End-to-end build from Markdown articles to a static site.

    Steps:
    1. Load every document (malformed ones are reported, not fatal)
    2. Build the listing: drop drafts unless previewing, order by date
    3. Render one page per listed document plus the index page
    """

    def __init__(
        self,
        config: Settings | None = None,
        loader: DocumentLoader | None = None,
        renderer: SiteRenderer | None = None,
    ):
        self.config = config or default_settings
        self.loader = loader or DocumentLoader(
            Path(self.config.content.content_dir),
            pattern=self.config.content.file_pattern,
            diagram_languages=self.config.content.diagram_languages,
        )
        self.renderer = renderer or SiteRenderer(config=self.config)

    def build(
        self,
        output_dir: Path | None = None,
        include_drafts: bool = False,
    ) -> BuildResult:
        """Render the site.

        Args:
            output_dir: Destination directory (defaults to settings).
            include_drafts: Render drafts too (preview build).

        Returns:
            BuildResult listing written pages, skipped drafts and failures.
        """
        output_dir = Path(output_dir or self.config.site.output_dir)
        result = BuildResult(output_dir=str(output_dir))

        logger.info("Step 1: Loading documents from %s...", self.loader.content_dir)
        loaded = self.loader.load_all()
        result.failures.extend(loaded.failures)

        logger.info("Step 2: Building listing...")
        listing = build_listing(
            loaded.documents,
            order=ListingOrder(self.config.listing.order),
            include_drafts=include_drafts,
        )
        if not include_drafts:
            result.skipped_drafts = [d.slug for d in loaded.documents if d.draft]
            self._remove_stale_drafts(output_dir, result.skipped_drafts, listing)

        logger.info("Step 3: Rendering %d pages...", len(listing) + 1)
        for document in listing:
            page = output_dir / document.slug / "index.html"
            self._write(page, self.renderer.render_post(document))
            result.pages.append(str(page))

        index = output_dir / "index.html"
        self._write(index, self.renderer.render_index(listing))
        result.pages.append(str(index))

        logger.info(
            "Build complete: %d pages, %d drafts skipped, %d failures",
            len(result.pages), len(result.skipped_drafts), len(result.failures),
        )
        return result

    def _remove_stale_drafts(self, output_dir: Path, drafts: list[str], listing) -> None:
        """Delete draft pages left behind by an earlier preview build."""
        listed = {d.slug for d in listing}
        for slug in drafts:
            if slug in listed:
                continue
            page = output_dir / slug / "index.html"
            if not page.is_file():
                continue
            page.unlink()
            if not any(page.parent.iterdir()):
                page.parent.rmdir()
            logger.info("Removed stale draft page %s", page)

    def _write(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("Wrote %s", path)
