"""Point-to-point distance between two catalog addresses."""

from __future__ import annotations

from cityradius.catalog.loader import AddressCatalog
from cityradius.core.geo import haversine_m
from cityradius.core.timing import measure
from cityradius.domain.models import DistanceResult


def distance_between(catalog: AddressCatalog, from_guid: str, to_guid: str) -> DistanceResult:
    """Haversine distance in km (2 dp). Raises `UnknownAddressError` for either guid."""
    with measure("Time to calculate distance between addresses"):
        src = catalog.require(from_guid)
        dst = catalog.require(to_guid)
        km = round(haversine_m(src.point, dst.point) / 1000.0, 2)
    return DistanceResult(from_=src, to=dst, distance=km)
