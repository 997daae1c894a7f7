"""
Site Renderer for blog articles.
Converts Markdown bodies to HTML and renders pages with Jinja2 templates.
"""

import html
import io
from pathlib import Path
from typing import Any, Iterable, Optional

import markdown as md
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from src.common.config import Settings, settings as default_settings
from src.content.body import DEFAULT_DIAGRAM_LANGUAGES, fence_content, split_blocks
from src.content.models import BlockKind, Document


class DiagramPreprocessor(Preprocessor):
    """Stashes diagram fences as ``<pre class="mermaid">`` blocks.

    The graph definition is passed through verbatim (HTML-escaped only) for
    the client-side diagram renderer. Runs before fenced_code so diagrams are
    not highlighted as code. Fences are located with ``split_blocks``, so a
    diagram fence quoted inside another code fence stays code.
    """

    def __init__(self, md_instance, languages: Iterable[str]):
        super().__init__(md_instance)
        self.languages = {lang.lower() for lang in languages}

    def run(self, lines: list[str]) -> list[str]:
        source = "".join(f"{line}\n" for line in lines)
        output: list[str] = []
        cursor = 0

        for block in split_blocks(source, self.languages):
            # Only blank lines sit between blocks.
            while not lines[cursor].strip():
                output.append(lines[cursor])
                cursor += 1
            size = len(io.StringIO(block.text).readlines())

            if block.kind is BlockKind.DIAGRAM:
                lang = block.language.lower()
                markup = (
                    f'<pre class="{lang}">'
                    f"{html.escape(fence_content(block), quote=False)}</pre>"
                )
                output.extend(["", self.md.htmlStash.store(markup), ""])
            else:
                output.extend(lines[cursor:cursor + size])
            cursor += size

        output.extend(lines[cursor:])
        return output



class DiagramExtension(Extension):
    """Python-Markdown extension registering DiagramPreprocessor."""

    def __init__(self, **kwargs):
        self.config = {
            "languages": [list(DEFAULT_DIAGRAM_LANGUAGES), "Fence languages rendered as diagrams"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md_instance):
        md_instance.preprocessors.register(
            DiagramPreprocessor(md_instance, self.getConfig("languages")),
            "diagram_block",
            28,  # after normalize_whitespace (30), before fenced_code_block (25)
        )


class MarkdownConverter:
    """Markdown-to-HTML conversion for article bodies."""

    def __init__(self, diagram_languages: Optional[Iterable[str]] = None):
        languages = list(diagram_languages or DEFAULT_DIAGRAM_LANGUAGES)
        self._md = md.Markdown(
            extensions=["tables", "fenced_code", DiagramExtension(languages=languages)],
        )

    def convert(self, text: str) -> str:
        self._md.reset()
        return self._md.convert(text)


class SiteRenderer:
    """
    Renders article and listing pages using Jinja2 templates.

    Usage:
        renderer = SiteRenderer()
        html_page = renderer.render_post(document)
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        config: Optional[Settings] = None,
    ):
        """
        Initialize the site renderer.

        Args:
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
            config: Settings providing site title, base URL and diagram languages.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.config = config or default_settings
        self.templates_dir = templates_dir
        self.converter = MarkdownConverter(self.config.content.diagram_languages)
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["isodate"] = lambda value: value.isoformat()
        self.env.filters["day"] = lambda value: value.strftime("%Y-%m-%d")

    def render_post(self, document: Document) -> str:
        """
        Render a full article page.

        Args:
            document: Loaded document

        Returns:
            Rendered HTML page
        """
        template = self.env.get_template("post.html.jinja2")
        return template.render(
            **self._site_context(),
            document=document,
            content=self.converter.convert(document.body),
            has_diagrams=any(b.kind == BlockKind.DIAGRAM for b in document.blocks),
        )

    def render_index(self, listing: list[Document]) -> str:
        """
        Render the listing page.

        Args:
            listing: Documents in display order

        Returns:
            Rendered HTML page
        """
        template = self.env.get_template("index.html.jinja2")
        return template.render(**self._site_context(), documents=listing)

    def post_url(self, document: Document) -> str:
        return f"{self.config.site.base_url.rstrip('/')}/{document.slug}/"

    def _site_context(self) -> dict[str, Any]:
        return {
            "site": self.config.site,
            "post_url": self.post_url,
        }


def render_markdown(text: str) -> str:
    """
    Convenience function to convert a Markdown body to HTML.

    Args:
        text: Markdown body

    Returns:
        HTML fragment
    """
    return MarkdownConverter().convert(text)
