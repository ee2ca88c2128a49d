"""
Radius search ("all addresses within R km of P").

Two-stage filter over the whole catalog, no spatial index:
1. a lat/lon bounding box around the center (cheap comparisons only),
2. an exact great-circle test on the survivors (strictly less than the radius).

Survivors are returned as new `RadiusMatch` values sorted by distance; catalog
entries themselves are never touched, so concurrent searches cannot interfere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from cityradius.core.geo import GeoPoint, bounding_box, spherical_cosine_m
from cityradius.core.timing import measure
from cityradius.domain.models import Address, CityMatch


@dataclass(frozen=True)
class RadiusMatch:
    address: Address
    distance_m: float

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0

    def to_city(self) -> CityMatch:
        return CityMatch.from_address(self.address, self.distance_km)


def find_within_radius(
    center: Address | GeoPoint,
    radius_km: float,
    addresses: Iterable[Address],
    *,
    exclude_guid: str | None = None,
) -> list[RadiusMatch]:
    """Return addresses strictly within `radius_km` of `center`, nearest first.

    When `center` is an `Address` it is excluded from the result by guid; pass
    `exclude_guid` to exclude a specific entry when searching around a bare point.
    """
    if isinstance(center, Address):
        origin = center.point
        exclude_guid = exclude_guid if exclude_guid is not None else center.guid
    else:
        origin = center

    radius_m = float(radius_km) * 1000.0
    if radius_m <= 0:
        return []

    with measure("Time to find addresses within radius"):
        box = bounding_box(origin, radius_m)
        candidates = [a for a in addresses if box.contains(a.latitude, a.longitude)]

        out: list[RadiusMatch] = []
        for a in candidates:
            if exclude_guid is not None and a.guid == exclude_guid:
                continue
            d = spherical_cosine_m(origin, GeoPoint(lat=a.latitude, lon=a.longitude))
            if d < radius_m:
                out.append(RadiusMatch(address=a, distance_m=d))

        out.sort(key=lambda m: m.distance_m)
    return out
