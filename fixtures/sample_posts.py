"""
Sample article sources for loader, listing and renderer tests.
Covers TOML and YAML front-matter, drafts, diagrams and malformed input.
"""

from pathlib import Path

PUBLISHED_TOML = """+++
title = "Retrieval-Augmented Generation in Practice"
date = 2024-02-12T09:30:00+01:00
draft = false
+++

Intro paragraph about retrieval.

## Pipeline

```mermaid
graph LR
    Q[Question] --> R[Retrieve]
    R --> A[Answer]
```

```python
print("hello")
```
"""

DRAFT_TOML = """+++
title = "Data Engineering Good Practice"
date = 2024-05-20T08:00:00+02:00
draft = true
+++

Notes in progress.
"""

PUBLISHED_YAML = """---
title: Grammar-Constrained LLM Output
date: 2023-11-28T14:15:00+00:00
draft: false
---

A grammar keeps output <valid>.
"""

MISSING_CLOSING = """+++
title = "Broken"
date = 2024-01-01T00:00:00Z
draft = false

Body without a closing delimiter.
"""

NAIVE_DATE = """+++
title = "No Offset"
date = 2024-01-01T00:00:00
draft = false
+++

Body.
"""


def get_sample_posts() -> dict[str, str]:
    """Well-formed sample posts keyed by file name."""
    return {
        "retrieval-augmented-generation.md": PUBLISHED_TOML,
        "data-engineering-good-practice.md": DRAFT_TOML,
        "grammar-constrained-output.md": PUBLISHED_YAML,
    }


def write_sample_posts(directory: Path, include_broken: bool = False) -> Path:
    """Write sample posts into ``directory`` and return it."""
    posts = get_sample_posts()
    if include_broken:
        posts["broken.md"] = MISSING_CLOSING
        posts["naive-date.md"] = NAIVE_DATE

    directory.mkdir(parents=True, exist_ok=True)
    for name, text in posts.items():
        (directory / name).write_text(text, encoding="utf-8")
    return directory
