"""Collection assembly: draft filtering, slug uniqueness, ordering, and lookups"""

from typing import Iterable, Optional

from mdblog.core.models import ContentRecord
from mdblog.errors import CollectionError


def find_slug_conflicts(records: Iterable[ContentRecord]) -> dict[str, list[str]]:
    """Return {slug: [identifiers...]} for every slug claimed by more than one record."""
    by_slug: dict[str, list[str]] = {}
    for r in records:
        by_slug.setdefault(r.slug, []).append(r.identifier)
    return {slug: sorted(ids) for slug, ids in by_slug.items() if len(ids) > 1}


def assemble_collection(records: Iterable[ContentRecord]) -> list[ContentRecord]:
    """Drop drafts, enforce unique slugs, and order newest first (ties by identifier).

    Raises CollectionError naming every conflicting identifier.
    """
    published = [r for r in records if not r.draft]

    conflicts = find_slug_conflicts(published)
    if conflicts:
        raise CollectionError(conflicts)

    ordered = sorted(published, key=lambda r: r.identifier)
    ordered.sort(key=lambda r: r.publish_date, reverse=True)  # stable: identifier order survives ties
    return ordered


def get_by_slug(records: Iterable[ContentRecord], slug: str) -> Optional[ContentRecord]:
    """Return the record with the given slug, or None if not found."""
    return next((r for r in records if r.slug == slug), None)


def tag_index(records: Iterable[ContentRecord]) -> dict[str, list[str]]:
    """Map each tag to the identifiers carrying it, in collection order.

    A record listing the same tag twice is indexed once.
    """
    index: dict[str, list[str]] = {}
    for r in records:
        for tag in dict.fromkeys(r.tags):
            index.setdefault(tag, []).append(r.identifier)
    return index
