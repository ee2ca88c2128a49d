"""
Domain models (Pydantic).

These types are the contract between layers:
- catalog entities (`Address`)
- radius search output (`CityMatch`) and its persisted job record (`RadiusLookupJob`)
- point-to-point output (`DistanceResult`)

Field names serialize in the catalog's camelCase (`isActive`) so API responses and
job records look like the source document. Use `model_dump(by_alias=True)`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cityradius.core.geo import GeoPoint

LookupStatus = Literal["in_progress", "complete"]


class Address(BaseModel):
    """One catalog entry. Frozen: the catalog is shared by every request."""

    # Unknown fields (street, city, ...) are kept and echoed back as-is.
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    guid: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    tags: tuple[str, ...] = ()
    is_active: bool = Field(False, alias="isActive")

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_tuple(cls, tags):
        if tags is None:
            return ()
        return tuple(tags)

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(lat=self.latitude, lon=self.longitude)


class CityMatch(Address):
    """An address copied into a radius search result, with its distance in km."""

    distance: float = Field(..., ge=0)

    @classmethod
    def from_address(cls, address: Address, distance_km: float) -> "CityMatch":
        return cls.model_validate({**address.model_dump(by_alias=True), "distance": distance_km})


class RadiusLookupJob(BaseModel):
    """Persisted state of one radius search."""

    model_config = ConfigDict(populate_by_name=True)

    guid: str
    from_: Address = Field(..., alias="from")
    distance: int = Field(..., ge=1)
    status: LookupStatus = "in_progress"
    cities: list[CityMatch] = Field(default_factory=list)
    created_at_unix: int | None = None
    updated_at_unix: int | None = None


class DistanceResult(BaseModel):
    """Distance between two catalog addresses."""

    model_config = ConfigDict(populate_by_name=True)

    from_: Address = Field(..., alias="from")
    to: Address
    unit: Literal["km"] = "km"
    distance: float
