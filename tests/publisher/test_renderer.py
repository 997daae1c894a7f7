"""Tests for Markdown conversion and Jinja2 page rendering.

Tests cover:
- Fenced code keeps its language hint and is escaped, not executed
- Diagram fences pass through verbatim as <pre class="mermaid">
- Tables
- Post and index pages (site context, draft notice, diagram script)
"""

from pathlib import Path

import pytest

from fixtures.sample_posts import DRAFT_TOML, PUBLISHED_TOML, PUBLISHED_YAML
from src.common.config import Settings
from src.content.body import split_blocks
from src.content.loader import parse_document
from src.content.models import BlockKind
from src.publisher.renderer import MarkdownConverter, SiteRenderer, render_markdown


@pytest.fixture
def renderer() -> SiteRenderer:
    config = Settings()
    config.site.title = "Test Notes"
    config.site.base_url = "/blog/"
    return SiteRenderer(config=config)


class TestMarkdownConverter:
    def test_paragraph_and_heading(self):
        html = render_markdown("## Title\n\nSome *text*.\n")
        assert "<h2>Title</h2>" in html
        assert "<em>text</em>" in html

    def test_code_fence_language_hint(self):
        html = render_markdown('```python\nprint("<hi>")\n```\n')
        assert 'class="language-python"' in html
        assert "&lt;hi&gt;" in html

    def test_diagram_passed_through(self):
        body = "```mermaid\ngraph LR\n    A --> B\n```\n"
        html = render_markdown(body)
        assert '<pre class="mermaid">graph LR\n    A --&gt; B\n</pre>' in html
        assert "language-mermaid" not in html
        assert "<code" not in html

    def test_diagram_and_code_together(self):
        body = (
            "```mermaid\ngraph TD\n```\n\n"
            "Between.\n\n"
            "```bnf\n<a> ::= \"x\"\n```\n"
        )
        html = render_markdown(body)
        assert '<pre class="mermaid">graph TD\n</pre>' in html
        assert 'class="language-bnf"' in html
        assert "<p>Between.</p>" in html

    def test_custom_diagram_language(self):
        converter = MarkdownConverter(["plantuml"])
        html = converter.convert("```plantuml\n@startuml\n```\n")
        assert '<pre class="plantuml">@startuml\n</pre>' in html

    def test_diagram_fence_inside_code_fence_stays_code(self):
        body = "````\n```mermaid\ngraph TD\n```\n````\n"
        html = render_markdown(body)
        assert '<pre class="mermaid">' not in html
        assert "<pre><code>```mermaid\ngraph TD\n```\n</code></pre>" in html
        assert [b.kind for b in split_blocks(body)] == [BlockKind.CODE]

    def test_indented_tilde_diagram_fence(self):
        body = "Intro.\n\n  ~~~~ Mermaid\n  graph TD\n  ~~~~\n\nAfter.\n"
        html = render_markdown(body)
        assert '<pre class="mermaid">  graph TD\n</pre>' in html
        assert "<p>Intro.</p>" in html
        assert "<p>After.</p>" in html

    def test_table(self):
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table>" in html

    def test_converter_is_reusable(self):
        converter = MarkdownConverter()
        first = converter.convert("```mermaid\ngraph TD\n```\n")
        second = converter.convert("plain\n")
        assert "mermaid" in first
        assert second == "<p>plain</p>"


class TestSiteRenderer:
    def test_render_post(self, renderer):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        page = renderer.render_post(doc)
        assert "<!DOCTYPE html>" in page
        assert "<title>Retrieval-Augmented Generation in Practice | Test Notes</title>" in page
        assert '<time datetime="2024-02-12T09:30:00+01:00">2024-02-12</time>' in page
        assert '<pre class="mermaid">' in page
        assert "mermaid.initialize" in page
        assert 'class="language-python"' in page
        assert "draft-notice" not in page

    def test_render_post_without_diagrams(self, renderer):
        doc = parse_document(PUBLISHED_YAML, Path("grammar.md"))
        page = renderer.render_post(doc)
        assert "mermaid.initialize" not in page

    def test_body_html_not_double_escaped(self, renderer):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        page = renderer.render_post(doc)
        assert "&lt;p&gt;" not in page
        assert "<p>Intro paragraph about retrieval.</p>" in page

    def test_title_is_escaped(self, renderer):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md")).with_meta(title="A <b> & C")
        page = renderer.render_post(doc)
        assert "<h1>A &lt;b&gt; &amp; C</h1>" in page

    def test_draft_preview_notice(self, renderer):
        doc = parse_document(DRAFT_TOML, Path("data-engineering-good-practice.md"))
        page = renderer.render_post(doc)
        assert "draft-notice" in page
        assert 'content="noindex"' in page

    def test_render_index(self, renderer):
        docs = [
            parse_document(PUBLISHED_TOML, Path("rag.md")),
            parse_document(PUBLISHED_YAML, Path("grammar.md")),
        ]
        page = renderer.render_index(docs)
        assert '<a href="/blog/rag/">Retrieval-Augmented Generation in Practice</a>' in page
        assert page.index("/blog/rag/") < page.index("/blog/grammar/")
        assert "<title>Test Notes</title>" in page

    def test_post_url(self, renderer):
        doc = parse_document(PUBLISHED_TOML, Path("rag.md"))
        assert renderer.post_url(doc) == "/blog/rag/"
