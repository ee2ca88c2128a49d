"""
Tag filter.

An address matches when it carries at least one of the requested tags and, if an
`is_active` flag is given, its `isActive` equals that flag. Tag comparison is exact
(case-sensitive), as stored in the catalog.

By default each matching address is returned once, in catalog order. With
`dedupe=False` an address is emitted once per requested tag it satisfies, which is
what older clients of this endpoint received.
"""

from __future__ import annotations

from typing import Iterable

from cityradius.core.timing import measure
from cityradius.domain.models import Address


def parse_tag_list(raw: str | None) -> list[str]:
    """Split a comma-separated `tag` query value, dropping blanks."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def filter_by_tags_and_active(
    addresses: Iterable[Address],
    tags: Iterable[str],
    is_active: bool | None = None,
    *,
    dedupe: bool = True,
) -> list[Address]:
    wanted = list(tags)
    wanted_set = set(wanted)
    matched: list[Address] = []

    with measure("Total time to filter by tag"):
        for address in addresses:
            if is_active is not None and address.is_active != is_active:
                continue
            if dedupe:
                if wanted_set.intersection(address.tags):
                    matched.append(address)
                continue
            for tag in wanted:
                if tag in address.tags:
                    matched.append(address)

    return matched
