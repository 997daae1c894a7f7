"""Content integrity checks for a loaded article collection.

Checks front-matter validity, slug uniqueness, closed fences, listing
correctness (no drafts, date order) and byte-exact serialization.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from src.content.body import unclosed_fences
from src.content.front_matter import serialize
from src.content.loader import LoadResult

from .listing import ListingOrder, build_listing, is_ordered

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a single validation check."""

    check_name: str  # front_matter | unique_slugs | closed_fences | listing | round_trip
    passed: bool
    detail: str

    def to_dict(self) -> dict:
        return {
            "check_name": self.check_name,
            "passed": self.passed,
            "detail": self.detail,
        }


class ContentValidator:
    """Validates a loaded collection against the content-integrity rules.

    Checks:
    1. Front-matter — every file parsed into exactly title, date, draft
    2. Unique slugs — no two documents publish to the same URL
    3. Closed fences — every fenced code/diagram block is terminated
    4. Listing — the published listing has no drafts and is date ordered
    5. Round trip — a no-op serialize pass reproduces each source file

    Usage:
        validator = ContentValidator()
        results = validator.validate(loader.load_all())
    """

    def __init__(self, order: ListingOrder | str = ListingOrder.NEWEST_FIRST) -> None:
        self.order = ListingOrder(order)

    def validate(self, loaded: LoadResult) -> list[ValidationResult]:
        """Run all validation checks.

        Args:
            loaded: Output of DocumentLoader.load_all().

        Returns:
            List of ValidationResult (one per check).
        """
        results = [
            self._check_front_matter(loaded),
            self._check_unique_slugs(loaded),
            self._check_closed_fences(loaded),
            self._check_listing(loaded),
            self._check_round_trip(loaded),
        ]
        for r in results:
            if not r.passed:
                logger.warning("Check %s failed: %s", r.check_name, r.detail)
        return results

    def _check_front_matter(self, loaded: LoadResult) -> ValidationResult:
        if not loaded.failures:
            return ValidationResult(
                check_name="front_matter",
                passed=True,
                detail=f"{len(loaded.documents)} documents parsed",
            )
        return ValidationResult(
            check_name="front_matter",
            passed=False,
            detail="; ".join(f.error for f in loaded.failures),
        )

    def _check_unique_slugs(self, loaded: LoadResult) -> ValidationResult:
        counts = Counter(d.slug for d in loaded.documents)
        duplicates = sorted(slug for slug, n in counts.items() if n > 1)
        if not duplicates:
            return ValidationResult(
                check_name="unique_slugs",
                passed=True,
                detail=f"{len(counts)} unique slugs",
            )
        return ValidationResult(
            check_name="unique_slugs",
            passed=False,
            detail=f"Duplicate slug(s): {', '.join(duplicates)}",
        )

    def _check_closed_fences(self, loaded: LoadResult) -> ValidationResult:
        """Every fenced block needs a closing fence."""
        offenders = [
            str(d.path) for d in loaded.documents if unclosed_fences(d.blocks)
        ]
        if not offenders:
            return ValidationResult(
                check_name="closed_fences",
                passed=True,
                detail="All fenced blocks closed",
            )
        return ValidationResult(
            check_name="closed_fences",
            passed=False,
            detail=f"Unclosed fence in: {', '.join(offenders)}",
        )

    def _check_listing(self, loaded: LoadResult) -> ValidationResult:
        """The public listing must exclude drafts and respect date order."""
        listing = build_listing(loaded.documents, order=self.order)
        drafts = [d.slug for d in listing if d.draft]
        if drafts:
            return ValidationResult(
                check_name="listing",
                passed=False,
                detail=f"Draft(s) in published listing: {', '.join(drafts)}",
            )
        if not is_ordered(listing, self.order):
            return ValidationResult(
                check_name="listing",
                passed=False,
                detail=f"Listing not ordered {self.order.value}",
            )
        return ValidationResult(
            check_name="listing",
            passed=True,
            detail=f"{len(listing)} published, ordered {self.order.value}",
        )

    def _check_round_trip(self, loaded: LoadResult) -> ValidationResult:
        """Serializing an unmodified document must reproduce its source."""
        mismatched = [
            str(d.path) for d in loaded.documents
            if str(d.path) in loaded.sources
            and serialize(d) != loaded.sources[str(d.path)]
        ]
        if not mismatched:
            return ValidationResult(
                check_name="round_trip",
                passed=True,
                detail="All documents serialize byte for byte",
            )
        return ValidationResult(
            check_name="round_trip",
            passed=False,
            detail=f"Round trip differs for: {', '.join(mismatched)}",
        )
