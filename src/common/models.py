"""Shared enums used by both settings and the publisher."""

from __future__ import annotations

from enum import Enum


class ListingOrder(str, Enum):
    """Date ordering policy for listings."""
    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"
