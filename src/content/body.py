"""Body block scanner.

Splits a Markdown body into an ordered list of blocks (headings, paragraphs,
lists, quotes, rules, raw HTML, fenced code and fenced diagrams). Each block
keeps its verbatim source lines; fenced content is never interpreted.
"""

from __future__ import annotations

import io
import re
from typing import Iterable

from .models import Block, BlockKind

DEFAULT_DIAGRAM_LANGUAGES = ("mermaid",)

FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
HEADING_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+|$)")
RULE_RE = re.compile(r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$")
LIST_ITEM_RE = re.compile(r"^ {0,3}(?:[-*+]|\d{1,9}[.)])(?:[ \t]+|$)")
QUOTE_RE = re.compile(r"^ {0,3}>")
HTML_RE = re.compile(r"^ {0,3}<")


def split_blocks(
    body: str,
    diagram_languages: Iterable[str] = DEFAULT_DIAGRAM_LANGUAGES,
) -> list[Block]:
    """Split a Markdown body into blocks.

    Args:
        body: Markdown text following the front-matter.
        diagram_languages: Fence info words that mark a diagram block.

    Returns:
        Blocks in source order. Blank lines between blocks are dropped.
    """
    diagrams = {lang.lower() for lang in diagram_languages}
    lines = io.StringIO(body).readlines()
    blocks: list[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        stripped = line.rstrip("\r\n")

        if not stripped.strip():
            i += 1
            continue

        fence = FENCE_OPEN_RE.match(stripped)
        if fence and not (fence.group("fence")[0] == "`" and "`" in fence.group("info")):
            block, i = _scan_fence(lines, i, fence, diagrams)
            blocks.append(block)
            continue

        heading = HEADING_RE.match(stripped)
        if heading:
            blocks.append(Block(
                kind=BlockKind.HEADING,
                text=line,
                level=len(heading.group("hashes")),
            ))
            i += 1
            continue

        if RULE_RE.match(stripped):
            blocks.append(Block(kind=BlockKind.RULE, text=line))
            i += 1
            continue

        if LIST_ITEM_RE.match(stripped):
            end = _scan_list(lines, i)
            blocks.append(Block(kind=BlockKind.LIST, text="".join(lines[i:end])))
            i = end
            continue

        if QUOTE_RE.match(stripped):
            end = _scan_while(lines, i, lambda s: bool(QUOTE_RE.match(s)))
            blocks.append(Block(kind=BlockKind.QUOTE, text="".join(lines[i:end])))
            i = end
            continue

        if HTML_RE.match(stripped):
            end = _scan_while(lines, i, lambda s: bool(s.strip()))
            blocks.append(Block(kind=BlockKind.HTML, text="".join(lines[i:end])))
            i = end
            continue

        end = _scan_paragraph(lines, i)
        blocks.append(Block(kind=BlockKind.PARAGRAPH, text="".join(lines[i:end])))
        i = end

    return blocks


def unclosed_fences(blocks: Iterable[Block]) -> list[Block]:
    """Return fenced blocks that run to the end of the body unclosed."""
    return [
        b for b in blocks
        if b.kind in (BlockKind.CODE, BlockKind.DIAGRAM) and not b.closed
    ]


def fence_content(block: Block) -> str:
    """Return the lines between a fenced block's opening and closing fences."""
    lines = io.StringIO(block.text).readlines()
    inner = lines[1:-1] if block.closed else lines[1:]
    return "".join(inner)


# --- Internal scanners ---


def _scan_fence(lines, start, match, diagrams) -> tuple[Block, int]:
    fence = match.group("fence")
    info = match.group("info").strip()
    close_re = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")

    end = start + 1
    closed = False
    while end < len(lines):
        if close_re.match(lines[end].rstrip("\r\n")):
            closed = True
            end += 1
            break
        end += 1

    language = info.split()[0].lower() if info else ""
    kind = BlockKind.DIAGRAM if language in diagrams else BlockKind.CODE
    block = Block(kind=kind, text="".join(lines[start:end]), info=info, closed=closed)
    return block, end


def _scan_list(lines, start) -> int:
    """A list runs over item lines, indented continuations and inner blanks."""
    end = start + 1
    while end < len(lines):
        stripped = lines[end].rstrip("\r\n")
        if not stripped.strip():
            # A blank line stays inside the list only if more list follows
            nxt = end + 1
            while nxt < len(lines) and not lines[nxt].strip():
                nxt += 1
            if nxt < len(lines) and _continues_list(lines[nxt].rstrip("\r\n")):
                end = nxt
                continue
            break
        if _continues_list(stripped) or not _starts_block(stripped):
            end += 1
            continue
        break
    return _trim_trailing_blanks(lines, start, end)


def _continues_list(stripped: str) -> bool:
    return bool(LIST_ITEM_RE.match(stripped)) or stripped.startswith(("  ", "\t"))


def _scan_paragraph(lines, start) -> int:
    end = start + 1
    while end < len(lines):
        stripped = lines[end].rstrip("\r\n")
        if not stripped.strip() or _starts_block(stripped):
            break
        end += 1
    return end


def _scan_while(lines, start, predicate) -> int:
    end = start + 1
    while end < len(lines) and predicate(lines[end].rstrip("\r\n")):
        end += 1
    return end


def _starts_block(stripped: str) -> bool:
    return bool(
        FENCE_OPEN_RE.match(stripped)
        or HEADING_RE.match(stripped)
        or RULE_RE.match(stripped)
        or LIST_ITEM_RE.match(stripped)
        or QUOTE_RE.match(stripped)
    )


def _trim_trailing_blanks(lines, start, end) -> int:
    while end > start + 1 and not lines[end - 1].strip():
        end -= 1
    return end
