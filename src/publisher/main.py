"""CLI entry point for listing, checking and building the blog.

Usage:
    python -m src.publisher.main list
    python -m src.publisher.main list --drafts --order oldest_first
    python -m src.publisher.main check
    python -m src.publisher.main build --output public/
    python -m src.publisher.main show posts/data-engineering-good-practice.md
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.common.config import settings
from src.common.logging import setup_logging
from src.content.front_matter import FrontMatterError
from src.content.loader import DocumentLoader

from .builder import SiteBuilder
from .listing import ListingOrder, build_listing
from .validator import ContentValidator

logger = setup_logging(module_name="publisher.main")


def cmd_list(args: argparse.Namespace, loader: DocumentLoader) -> int:
    loaded = loader.load_all()
    listing = build_listing(loaded.documents, order=args.order, include_drafts=args.drafts)
    for doc in listing:
        marker = " [draft]" if doc.draft else ""
        print(f"{doc.date.isoformat()}  {doc.slug}  {doc.title}{marker}")
    return 0 if loaded.success else 1


def cmd_check(args: argparse.Namespace, loader: DocumentLoader) -> int:
    results = ContentValidator(order=args.order).validate(loader.load_all())
    for r in results:
        status = "PASS" if r.passed else "FAIL"
        print(f"[{status}] {r.check_name}: {r.detail}")
    return 0 if all(r.passed for r in results) else 1


def cmd_build(args: argparse.Namespace, loader: DocumentLoader) -> int:
    config = settings.model_copy(deep=True)
    config.listing.order = args.order
    builder = SiteBuilder(config=config, loader=loader)
    result = builder.build(output_dir=args.output, include_drafts=args.drafts)
    print(f"\nBuilt {len(result.pages)} pages into {result.output_dir}")
    return 0 if result.success else 1


def cmd_show(args: argparse.Namespace, loader: DocumentLoader) -> int:
    try:
        doc = loader.get(args.path)
    except (FileNotFoundError, FrontMatterError) as e:
        logger.error("%s", e)
        return 1

    print(f"title: {doc.title}")
    print(f"date:  {doc.date.isoformat()}")
    print(f"draft: {str(doc.draft).lower()}")
    print(f"slug:  {doc.slug}")
    print()
    for block in doc.blocks:
        summary = block.text.splitlines()[0].strip() if block.text else ""
        print(f"  {block.kind.value:<9} {summary[:70]}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List, check and build blog articles")
    parser.add_argument(
        "--content",
        type=Path,
        default=Path(settings.content.content_dir),
        help=f"Content directory (default: {settings.content.content_dir})",
    )
    parser.add_argument(
        "--order",
        choices=[o.value for o in ListingOrder],
        default=settings.listing.order.value,
        help=f"Listing order (default: {settings.listing.order.value})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Print the article listing")
    p_list.add_argument("--drafts", action="store_true", help="Include drafts")
    p_list.set_defaults(func=cmd_list)

    p_check = sub.add_parser("check", help="Run content integrity checks")
    p_check.set_defaults(func=cmd_check)

    p_build = sub.add_parser("build", help="Render the site to HTML")
    p_build.add_argument("--output", type=Path, help="Output directory")
    p_build.add_argument("--drafts", action="store_true", help="Preview build including drafts")
    p_build.set_defaults(func=cmd_build)

    p_show = sub.add_parser("show", help="Show one document, drafts included")
    p_show.add_argument("path", help="Path relative to the content directory")
    p_show.set_defaults(func=cmd_show)

    args = parser.parse_args(argv)
    loader = DocumentLoader(
        args.content,
        pattern=settings.content.file_pattern,
        diagram_languages=settings.content.diagram_languages,
    )
    return args.func(args, loader)


if __name__ == "__main__":
    sys.exit(main())
