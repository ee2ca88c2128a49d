"""
Address catalog loader.

The catalog is a local JSON file (default: `data/addresses/addresses.json`) holding a
list of addresses with coordinates, tags and an `isActive` flag. It is validated into
frozen Pydantic models once, at startup, and then shared read-only by every request.

A malformed catalog is fatal: `load_catalog` either returns the whole catalog or
raises `LoadError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

from pydantic import TypeAdapter, ValidationError

from cityradius.core.env import resolve_project_path
from cityradius.core.errors import LoadError, UnknownAddressError
from cityradius.core.timing import measure
from cityradius.domain.models import Address

logger = logging.getLogger(__name__)

_ADDRESSES_ADAPTER = TypeAdapter(list[Address])


class AddressCatalog:
    """Immutable, guid-indexed collection of addresses."""

    def __init__(self, addresses: list[Address], *, source_path: Path | None = None):
        self._addresses = tuple(addresses)
        self._source_path = source_path
        self._by_guid: dict[str, Address] = {}
        for a in self._addresses:
            if a.guid in self._by_guid:
                raise ValueError(f"duplicate guid '{a.guid}'")
            self._by_guid[a.guid] = a

    @property
    def addresses(self) -> tuple[Address, ...]:
        return self._addresses

    @property
    def source_path(self) -> Path | None:
        return self._source_path

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[Address]:
        return iter(self._addresses)

    def lookup(self, guid: str) -> Address | None:
        return self._by_guid.get(guid)

    def require(self, guid: str) -> Address:
        """Like `lookup`, but raises `UnknownAddressError` when missing."""
        address = self.lookup(guid)
        if address is None:
            raise UnknownAddressError(guid)
        return address


def load_catalog(path: str | Path) -> AddressCatalog:
    """Load and validate an address catalog JSON file."""
    resolved = resolve_project_path(path)
    with measure("Time to load address catalog") as m:
        try:
            payload = json.loads(resolved.read_text(encoding="utf-8"))
        except OSError as e:
            raise LoadError(str(resolved), f"cannot read file ({e.strerror or e})") from e
        except json.JSONDecodeError as e:
            raise LoadError(str(resolved), f"invalid JSON ({e})") from e

        if not isinstance(payload, list):
            raise LoadError(str(resolved), "expected a JSON list of addresses")

        try:
            addresses = _ADDRESSES_ADAPTER.validate_python(payload)
            catalog = AddressCatalog(addresses, source_path=resolved)
        except ValidationError as e:
            raise LoadError(str(resolved), f"invalid address record ({e.error_count()} errors): {e}") from e
        except ValueError as e:
            raise LoadError(str(resolved), str(e)) from e

    logger.info("Loaded %d addresses from %s in %.1fms", len(catalog), resolved, m.duration_ms)
    return catalog
