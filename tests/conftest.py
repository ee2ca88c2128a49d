"""Shared fixtures: a tiny catalog around (0, 0) and a job store in a temp dir."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cityradius.catalog.loader import AddressCatalog, load_catalog
from cityradius.lookups.store import LookupJobStore

CENTER = "00000000-0000-4000-8000-000000000000"
EAST_HALF = "00000000-0000-4000-8000-000000000001"  # ~55.6 km
EAST_ONE = "00000000-0000-4000-8000-000000000002"  # ~111.2 km
NORTH_ONE = "00000000-0000-4000-8000-000000000003"  # ~111.2 km
EAST_TWO = "00000000-0000-4000-8000-000000000004"  # ~222.4 km
FAR_AWAY = "00000000-0000-4000-8000-000000000005"  # ~1,570 km

CATALOG_ROWS = [
    {"guid": CENTER, "latitude": 0.0, "longitude": 0.0, "tags": ["port", "capital"], "isActive": True, "name": "Null Island"},
    {"guid": EAST_HALF, "latitude": 0.0, "longitude": 0.5, "tags": ["port"], "isActive": False, "name": "Half East"},
    {"guid": EAST_ONE, "latitude": 0.0, "longitude": 1.0, "tags": ["port", "market"], "isActive": True, "name": "One East"},
    {"guid": NORTH_ONE, "latitude": 1.0, "longitude": 0.0, "tags": ["market"], "isActive": True, "name": "One North"},
    {"guid": EAST_TWO, "latitude": 0.0, "longitude": 2.0, "tags": ["farm"], "isActive": False, "name": "Two East"},
    {"guid": FAR_AWAY, "latitude": 10.0, "longitude": 10.0, "tags": ["capital"], "isActive": True, "name": "Far Away"},
]


@pytest.fixture()
def catalog_path(tmp_path: Path) -> Path:
    path = tmp_path / "addresses.json"
    path.write_text(json.dumps(CATALOG_ROWS), encoding="utf-8")
    return path


@pytest.fixture()
def catalog(catalog_path: Path) -> AddressCatalog:
    return load_catalog(catalog_path)


@pytest.fixture()
def store(tmp_path: Path) -> LookupJobStore:
    return LookupJobStore(tmp_path / "radius_lookups")
