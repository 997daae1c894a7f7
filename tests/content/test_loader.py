"""Tests for the document loader and document model."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from fixtures.sample_posts import PUBLISHED_TOML
from src.content.front_matter import FrontMatterError
from src.content.loader import DocumentLoader, load_document, parse_document
from src.content.models import BlockKind, FrontMatterFormat, slug_for_path


class TestParseDocument:
    def test_fields(self):
        doc = parse_document(PUBLISHED_TOML, Path("posts/rag.md"))
        assert doc.slug == "rag"
        assert doc.title == "Retrieval-Augmented Generation in Practice"
        assert doc.draft is False
        assert doc.is_published
        assert doc.front_matter.format == FrontMatterFormat.TOML
        assert doc.body.startswith("\nIntro paragraph")

    def test_blocks(self):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        kinds = [b.kind for b in doc.blocks]
        assert kinds == [
            BlockKind.PARAGRAPH,
            BlockKind.HEADING,
            BlockKind.DIAGRAM,
            BlockKind.CODE,
        ]
        assert [h.text.strip() for h in doc.headings()] == ["## Pipeline"]

    def test_document_is_frozen(self):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        with pytest.raises(ValidationError):
            doc.slug = "other"

    def test_with_meta_returns_copy(self):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        drafted = doc.with_meta(draft=True)
        assert drafted.draft is True
        assert doc.draft is False
        assert drafted.body == doc.body

    def test_with_meta_validates(self):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        with pytest.raises(ValidationError):
            doc.with_meta(title="")


class TestSlugForPath:
    def test_file_stem(self):
        assert slug_for_path(Path("posts/choosing-a-vector-database.md")) == "choosing-a-vector-database"

    def test_index_bundle(self):
        assert slug_for_path(Path("posts/rag-in-practice/index.md")) == "rag-in-practice"


class TestDocumentLoader:
    def test_load_all(self, loader):
        result = loader.load_all()
        assert result.success
        assert result.total == 3
        slugs = {d.slug for d in result.documents}
        assert slugs == {
            "retrieval-augmented-generation",
            "data-engineering-good-practice",
            "grammar-constrained-output",
        }

    def test_load_all_is_sorted_by_path(self, loader):
        paths = [d.path for d in loader.load_all().documents]
        assert paths == sorted(paths)

    def test_load_all_keeps_sources(self, loader):
        result = loader.load_all()
        for doc in result.documents:
            assert result.sources[str(doc.path)] == doc.path.read_text(encoding="utf-8")

    def test_drafts_are_loaded(self, loader):
        result = loader.load_all()
        draft = [d for d in result.documents if d.draft]
        assert [d.title for d in draft] == ["Data Engineering Good Practice"]

    def test_malformed_documents_are_reported(self, broken_content_dir):
        result = DocumentLoader(broken_content_dir).load_all()
        assert not result.success
        assert len(result.documents) == 3
        failed = sorted(f.path.name for f in result.failures)
        assert failed == ["broken.md", "naive-date.md"]
        assert all(f.error for f in result.failures)

    def test_recursive_discovery(self, content_dir):
        nested = content_dir / "2024" / "notes"
        nested.mkdir(parents=True)
        (nested / "index.md").write_text(
            '+++\ntitle = "Nested"\ndate = 2024-06-01T00:00:00Z\n+++\nBody\n',
            encoding="utf-8",
        )
        result = DocumentLoader(content_dir).load_all()
        assert "notes" in {d.slug for d in result.documents}

    def test_missing_content_dir(self, tmp_path):
        result = DocumentLoader(tmp_path / "nope").load_all()
        assert result.documents == []
        assert result.success

    def test_get_draft_by_path(self, loader):
        doc = loader.get("data-engineering-good-practice.md")
        assert doc.draft is True
        assert doc.title == "Data Engineering Good Practice"

    def test_get_missing(self, loader):
        with pytest.raises(FileNotFoundError):
            loader.get("missing.md")

    def test_get_malformed(self, broken_content_dir):
        with pytest.raises(FrontMatterError):
            DocumentLoader(broken_content_dir).get("broken.md")

    def test_crlf_file_round_trips(self, tmp_path):
        path = tmp_path / "crlf.md"
        path.write_bytes(b'+++\r\ntitle = "x"\r\ndate = 2024-01-01T00:00:00Z\r\n+++\r\nBody\r\n')
        doc = load_document(path)
        assert doc.body == "Body\r\n"
