"""Data models for the content package.

A Document is one Markdown article: a front-matter block (title, date, draft)
followed by a Markdown body. Documents are immutable once loaded; an edit
produces a new Document via ``with_meta``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


class FrontMatterFormat(str, Enum):
    """Supported front-matter syntaxes, keyed by their delimiter line."""
    TOML = "toml"
    YAML = "yaml"

    @property
    def delimiter(self) -> str:
        return "+++" if self is FrontMatterFormat.TOML else "---"

    @classmethod
    def from_delimiter(cls, line: str) -> FrontMatterFormat | None:
        for fmt in cls:
            if line == fmt.delimiter:
                return fmt
        return None


class BlockKind(str, Enum):
    """Kinds of Markdown block found in a document body."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    QUOTE = "quote"
    CODE = "code"
    DIAGRAM = "diagram"
    RULE = "rule"
    HTML = "html"


class DocumentMeta(BaseModel):
    """Front-matter metadata. Exactly title, date and draft are allowed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: StrictStr
    date: AwareDatetime
    draft: StrictBool = False

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value


class FrontMatter(BaseModel):
    """Front-matter text as authored.

    ``raw`` is the text between the delimiter lines; ``source`` is the whole
    block exactly as it appeared in the file (BOM and delimiters included).
    """

    model_config = ConfigDict(frozen=True)

    format: FrontMatterFormat = FrontMatterFormat.TOML
    raw: str = ""
    source: str = ""


class Block(BaseModel):
    """A single Markdown block with its verbatim source lines."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str
    info: str = ""  # fence info string (language hint) for code/diagram
    level: int = 0  # heading level 1-6
    closed: bool = True  # False for a fence that runs to end of body

    @property
    def language(self) -> str:
        """First word of the fence info string."""
        return self.info.split()[0] if self.info.strip() else ""


class Document(BaseModel):
    """A single self-contained article."""

    model_config = ConfigDict(frozen=True)

    path: Path
    slug: str
    meta: DocumentMeta
    front_matter: FrontMatter = Field(default_factory=FrontMatter)
    body: str = ""
    blocks: list[Block] = Field(default_factory=list)

    @property
    def title(self) -> str:
        return self.meta.title

    @property
    def date(self):
        return self.meta.date

    @property
    def draft(self) -> bool:
        return self.meta.draft

    @property
    def is_published(self) -> bool:
        return not self.meta.draft

    def with_meta(self, **changes) -> Document:
        """Return a copy with front-matter fields replaced (re-validated)."""
        data = self.meta.model_dump()
        data.update(changes)
        return self.model_copy(update={"meta": DocumentMeta(**data)})

    def headings(self) -> list[Block]:
        return [b for b in self.blocks if b.kind == BlockKind.HEADING]


def slug_for_path(path: Path) -> str:
    """Slug from the file stem; ``index.md`` bundles use their directory name."""
    if path.stem.lower() == "index" and path.parent.name:
        return path.parent.name
    return path.stem
