"""Listing pages — draft filtering and date ordering."""

from __future__ import annotations

from datetime import timezone
from typing import Iterable

from src.common.models import ListingOrder
from src.content.models import Document


def published(documents: Iterable[Document]) -> list[Document]:
    """Drop every document marked ``draft = true``."""
    return [doc for doc in documents if doc.is_published]


def build_listing(
    documents: Iterable[Document],
    order: ListingOrder | str = ListingOrder.NEWEST_FIRST,
    include_drafts: bool = False,
) -> list[Document]:
    """Build a listing ordered by date.

    Args:
        documents: Loaded documents.
        order: newest_first (non-increasing dates) or oldest_first
            (non-decreasing dates).
        include_drafts: Keep drafts in the listing (preview builds only).

    Returns:
        Ordered list of documents. Equal dates are ordered by slug.
    """
    order = ListingOrder(order)
    docs = list(documents) if include_drafts else published(documents)

    # Two stable sorts: slug ascending, then date in the requested direction
    docs.sort(key=lambda d: d.slug)
    docs.sort(
        key=lambda d: d.meta.date.astimezone(timezone.utc),
        reverse=order is ListingOrder.NEWEST_FIRST,
    )
    return docs


def find_by_slug(documents: Iterable[Document], slug: str) -> Document | None:
    """Look up a document by slug regardless of its draft flag."""
    for doc in documents:
        if doc.slug == slug:
            return doc
    return None


def is_ordered(documents: list[Document], order: ListingOrder | str) -> bool:
    """Check that a listing respects the date ordering policy."""
    order = ListingOrder(order)
    dates = [d.meta.date for d in documents]
    pairs = zip(dates, dates[1:])
    if order is ListingOrder.NEWEST_FIRST:
        return all(a >= b for a, b in pairs)
    return all(a <= b for a, b in pairs)
