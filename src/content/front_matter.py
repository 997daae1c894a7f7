"""Front-matter codec.

Splits a Markdown source into its front-matter block and body, parses the
block (TOML between ``+++`` lines, or YAML between ``---`` lines) into a
DocumentMeta, and serializes documents back to source text.

Unmodified documents serialize byte for byte: the original block text is
reused whenever the document's metadata still matches what it parses to.
"""

from __future__ import annotations

import io
import json
import tomllib
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import Document, DocumentMeta, FrontMatter, FrontMatterFormat

BOM = "\ufeff"


class FrontMatterError(ValueError):
    """Raised when a document's front-matter is missing or malformed."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.path = Path(path) if path is not None else None
        self.reason = message
        super().__init__(f"{path}: {message}" if path is not None else message)


def split_front_matter(
    text: str,
    path: Path | str | None = None,
) -> tuple[FrontMatter, str]:
    """Split source text into its front-matter block and body.

    Args:
        text: Full document source.
        path: Source path, used in error messages only.

    Returns:
        Tuple of (FrontMatter, body). The body is everything after the
        closing delimiter line, unchanged.

    Raises:
        FrontMatterError: If the opening or closing delimiter is missing.
    """
    offset = len(BOM) if text.startswith(BOM) else 0
    lines = io.StringIO(text[offset:]).readlines()
    if not lines:
        raise FrontMatterError("document is empty, expected front-matter", path)

    fmt = FrontMatterFormat.from_delimiter(lines[0].rstrip())
    if fmt is None:
        raise FrontMatterError(
            "missing opening front-matter delimiter ('+++' or '---')", path
        )

    consumed = len(lines[0])
    raw_parts: list[str] = []
    for line in lines[1:]:
        consumed += len(line)
        if line.rstrip() == fmt.delimiter:
            end = offset + consumed
            front_matter = FrontMatter(
                format=fmt,
                raw="".join(raw_parts),
                source=text[:end],
            )
            return front_matter, text[end:]
        raw_parts.append(line)

    raise FrontMatterError(
        f"missing closing front-matter delimiter '{fmt.delimiter}'", path
    )


def parse_front_matter(
    raw: str,
    fmt: FrontMatterFormat = FrontMatterFormat.TOML,
    path: Path | str | None = None,
) -> DocumentMeta:
    """Parse front-matter text into validated metadata.

    Raises:
        FrontMatterError: On a syntax error, a non-table front-matter, or a
            field that fails validation (missing, wrong type, unknown key).
    """
    data = _load_mapping(raw, fmt, path)
    try:
        return DocumentMeta.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'front-matter'}: {err['msg']}"
            for err in e.errors()
        )
        raise FrontMatterError(f"invalid front-matter: {problems}", path) from e


def dump_front_matter(
    meta: DocumentMeta,
    fmt: FrontMatterFormat = FrontMatterFormat.TOML,
) -> str:
    """Serialize metadata to front-matter text (without delimiters)."""
    if fmt is FrontMatterFormat.YAML:
        return yaml.safe_dump(
            {"title": meta.title, "date": meta.date, "draft": meta.draft},
            sort_keys=False,
            allow_unicode=True,
        )

    return (
        f"title = {_toml_string(meta.title)}\n"
        f"date = {meta.date.isoformat()}\n"
        f"draft = {'true' if meta.draft else 'false'}\n"
    )


def serialize(document: Document) -> str:
    """Reproduce a document's source text.

    The authored front-matter block is kept when it still parses to the
    document's metadata; otherwise it is regenerated in the same format.
    """
    front_matter = document.front_matter
    if front_matter.source and _parses_to(front_matter, document.meta):
        return front_matter.source + document.body

    delimiter = front_matter.format.delimiter
    dumped = dump_front_matter(document.meta, front_matter.format)
    return f"{delimiter}\n{dumped}{delimiter}\n{document.body}"


# --- Internal helpers ---


def _load_mapping(
    raw: str,
    fmt: FrontMatterFormat,
    path: Path | str | None,
) -> dict:
    if fmt is FrontMatterFormat.TOML:
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise FrontMatterError(f"invalid TOML front-matter: {e}", path) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid YAML front-matter: {e}", path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front-matter must be a mapping, got {type(data).__name__}", path
        )
    return data


def _parses_to(front_matter: FrontMatter, meta: DocumentMeta) -> bool:
    # Compare dumped values: aware datetimes are equal across offsets.
    try:
        parsed = parse_front_matter(front_matter.raw, front_matter.format)
        return parsed.model_dump(mode="json") == meta.model_dump(mode="json")
    except FrontMatterError:
        return False


def _toml_string(value: str) -> str:
    """Quote a value as a TOML basic string."""
    # JSON string escapes are a subset of TOML's; DEL must be escaped too
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007F")
