# Content Module
# Front-matter/body document model, codec and loader

from .body import split_blocks
from .front_matter import (
    FrontMatterError,
    dump_front_matter,
    parse_front_matter,
    serialize,
    split_front_matter,
)
from .loader import DocumentLoader, LoadFailure, LoadResult, load_document, parse_document
from .models import (
    Block,
    BlockKind,
    Document,
    DocumentMeta,
    FrontMatter,
    FrontMatterFormat,
)

__all__ = [
    "Block",
    "BlockKind",
    "Document",
    "DocumentLoader",
    "DocumentMeta",
    "FrontMatter",
    "FrontMatterError",
    "FrontMatterFormat",
    "LoadFailure",
    "LoadResult",
    "dump_front_matter",
    "load_document",
    "parse_document",
    "parse_front_matter",
    "serialize",
    "split_blocks",
    "split_front_matter",
]
