"""Document loader — reads Markdown articles from the content directory.

Usage:
    loader = DocumentLoader(Path("content"))
    result = loader.load_all()
    for doc in result.documents:
        print(doc.slug, doc.meta.date)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from src.common.config import settings

from .body import DEFAULT_DIAGRAM_LANGUAGES, split_blocks
from .front_matter import FrontMatterError, parse_front_matter, split_front_matter
from .models import Document, slug_for_path

logger = logging.getLogger(__name__)


@dataclass
class LoadFailure:
    """A document that could not be loaded."""
    path: Path
    error: str


@dataclass
class LoadResult:
    """Outcome of loading a whole content directory."""
    documents: list[Document] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)
    sources: dict[str, str] = field(default_factory=dict)  # str(path) -> source text

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.documents) + len(self.failures)


def parse_document(
    text: str,
    path: Path,
    diagram_languages: Iterable[str] = DEFAULT_DIAGRAM_LANGUAGES,
) -> Document:
    """Build a Document from source text.

    Raises:
        FrontMatterError: If the front-matter is missing or malformed.
    """
    front_matter, body = split_front_matter(text, path)
    meta = parse_front_matter(front_matter.raw, front_matter.format, path)
    return Document(
        path=path,
        slug=slug_for_path(path),
        meta=meta,
        front_matter=front_matter,
        body=body,
        blocks=split_blocks(body, diagram_languages),
    )


def load_document(
    path: Path,
    diagram_languages: Iterable[str] = DEFAULT_DIAGRAM_LANGUAGES,
) -> Document:
    """Read and parse a single document from disk.

    Raises:
        FrontMatterError: If the front-matter is missing or malformed.
        OSError: If the file cannot be read.
    """
    return parse_document(_read_text(path), path, diagram_languages)


class DocumentLoader:
    """Loads every article under a content directory.

    A malformed document is logged and recorded as a failure; it never
    stops the rest of the collection from loading.
    """

    def __init__(
        self,
        content_dir: Path | None = None,
        pattern: str | None = None,
        diagram_languages: Iterable[str] | None = None,
    ):
        self.content_dir = Path(content_dir or settings.content.content_dir)
        self.pattern = pattern or settings.content.file_pattern
        self.diagram_languages = tuple(
            diagram_languages
            if diagram_languages is not None
            else settings.content.diagram_languages
        )

    def discover(self) -> list[Path]:
        """List document paths, sorted for a deterministic load order."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory not found: %s", self.content_dir)
            return []
        return sorted(p for p in self.content_dir.rglob(self.pattern) if p.is_file())

    def load_all(self) -> LoadResult:
        """Load every document, collecting failures instead of raising."""
        result = LoadResult()
        for path in self.discover():
            try:
                text = _read_text(path)
                document = parse_document(text, path, self.diagram_languages)
            except (FrontMatterError, OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping %s: %s", path, e)
                result.failures.append(LoadFailure(path=path, error=str(e)))
                continue
            result.documents.append(document)
            result.sources[str(path)] = text

        logger.info(
            "Loaded %d/%d documents from %s",
            len(result.documents), result.total, self.content_dir,
        )
        return result

    def get(self, relative_path: str | Path) -> Document:
        """Load one document by path, drafts included (for previews).

        Raises:
            FileNotFoundError: If no such document exists.
            FrontMatterError: If the document is malformed.
        """
        path = Path(relative_path)
        if not path.is_absolute():
            path = self.content_dir / path
        if not path.is_file():
            raise FileNotFoundError(f"No document at {path}")
        return load_document(path, self.diagram_languages)


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF line endings so serialization stays byte-exact
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()
