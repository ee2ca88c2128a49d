from __future__ import annotations

from dataclasses import dataclass
from math import acos, atan2, cos, degrees, radians, sin, sqrt

"""
Geospatial helpers.

Earth is treated as a sphere of mean radius 6,371 km. Everything here is pure math
on decimal-degree coordinates; no GIS dependencies.
"""

EARTH_RADIUS_M = 6_371_000


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points (haversine)."""
    phi1 = radians(a.lat)
    phi2 = radians(b.lat)
    dphi = radians(b.lat - a.lat)
    dlambda = radians(b.lon - a.lon)

    h = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * atan2(sqrt(h), sqrt(1 - h))


def spherical_cosine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters via the spherical law of cosines.

    Equivalent to `haversine_m` up to rounding. Radius search uses this form so its
    distances match the bounding-circle derivation it pairs with.
    """
    phi1 = radians(a.lat)
    phi2 = radians(b.lat)
    x = sin(phi1) * sin(phi2) + cos(phi1) * cos(phi2) * cos(radians(b.lon) - radians(a.lon))
    # Rounding can push coincident points just past 1.0.
    return acos(max(-1.0, min(1.0, x))) * EARTH_RADIUS_M


def bounding_box(center: GeoPoint, radius_m: float) -> BoundingBox:
    """Lat/lon box enclosing the circle of `radius_m` around `center`.

    Generous near the poles (the cos term shrinks, widening the longitude span); callers
    must follow up with an exact distance test.
    """
    dlat = degrees(radius_m / EARTH_RADIUS_M)
    dlon = dlat / cos(radians(center.lat))
    return BoundingBox(
        min_lat=center.lat - dlat,
        max_lat=center.lat + dlat,
        min_lon=center.lon - dlon,
        max_lon=center.lon + dlon,
    )
