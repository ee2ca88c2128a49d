"""
API routes.

Endpoints:
- GET  `/api/cities-by-tag`: addresses carrying any of the given tags (optionally by `isActive`).
- GET  `/api/distance`: point-to-point distance between two addresses, in km.
- POST `/api/area`: run a radius lookup; returns the job id and where to poll it.
- GET  `/api/area?from=&distance=`: the same, for clients that use query strings.
- GET  `/api/area-result/{job_id}`: a radius lookup record (202 while in progress).
- GET  `/api/area-results`: summaries of stored radius lookups.
- GET  `/api/all-cities`: the raw catalog document, streamed from disk.
- GET  `/api/health`: liveness + catalog size.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from cityradius.api.auth import require_token
from cityradius.catalog.loader import AddressCatalog, load_catalog
from cityradius.config.settings import get_settings
from cityradius.core.env import resolve_project_path
from cityradius.core.errors import (
    CityRadiusError,
    ConflictError,
    InvalidIdentifierError,
    InvalidRadiusError,
    NotFoundError,
    PersistenceError,
    UnknownAddressError,
)
from cityradius.lookups.orchestrator import RadiusLookupOrchestrator
from cityradius.lookups.store import LookupJobStore
from cityradius.search.distance import distance_between
from cityradius.search.tags import filter_by_tags_and_active, parse_tag_list

router = APIRouter(prefix="/api", dependencies=[Depends(require_token)])


_ERROR_STATUS: list[tuple[type[CityRadiusError], int, str]] = [
    (UnknownAddressError, 404, "UNKNOWN_ADDRESS"),
    (InvalidRadiusError, 400, "INVALID_RADIUS"),
    (InvalidIdentifierError, 400, "INVALID_ID"),
    (NotFoundError, 404, "JOB_NOT_FOUND"),
    (ConflictError, 409, "JOB_EXISTS"),
    (PersistenceError, 500, "PERSISTENCE_ERROR"),
]


def _http_error(exc: CityRadiusError) -> HTTPException:
    for cls, status, code in _ERROR_STATUS:
        if isinstance(exc, cls):
            return HTTPException(status_code=status, detail={"code": code, "message": str(exc)})
    return HTTPException(status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(exc)})


@lru_cache
def _catalog() -> AddressCatalog:
    return load_catalog(get_settings().catalog.path)


@lru_cache
def _store() -> LookupJobStore:
    return LookupJobStore(resolve_project_path(get_settings().lookups.dir))


def _orchestrator() -> RadiusLookupOrchestrator:
    return RadiusLookupOrchestrator(
        _catalog(), _store(), max_radius_km=get_settings().lookups.max_radius_km
    )


class AreaRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from", min_length=1)
    # Validated by the orchestrator so every bad value maps to INVALID_RADIUS.
    distance: Any = None


@router.get("/health")
def get_health() -> dict:
    return {"status": "ok", "address_count": len(_catalog())}


@router.get("/cities-by-tag")
def get_cities_by_tag(
    tag: str | None = None,
    is_active: bool | None = Query(default=None, alias="isActive"),
) -> dict:
    """Return addresses matching any comma-separated `tag` (and `isActive`, if given)."""
    tags = parse_tag_list(tag)
    if not tags:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": "No tags were provided. Use /api/all-cities instead."},
        )
    cities = filter_by_tags_and_active(
        _catalog(), tags, is_active, dedupe=get_settings().catalog.dedupe_tag_matches
    )
    return {"cities": [c.model_dump(mode="json", by_alias=True) for c in cities]}


@router.get("/distance")
def get_distance(
    from_: str = Query(..., alias="from", min_length=1),
    to: str = Query(..., min_length=1),
) -> dict:
    try:
        result = distance_between(_catalog(), from_, to)
    except CityRadiusError as e:
        raise _http_error(e) from e
    return result.model_dump(mode="json", by_alias=True)


def _run_area_lookup(from_guid: str, distance: Any, request: Request) -> dict:
    try:
        job_id = _orchestrator().start_lookup(from_guid, distance)
    except CityRadiusError as e:
        raise _http_error(e) from e
    return {
        "job_id": job_id,
        "status": "accepted",
        "results_url": str(request.url_for("get_area_result", job_id=job_id)),
    }


@router.post("/area", status_code=202)
def post_area(req: AreaRequest, request: Request) -> dict:
    """Run a radius lookup and point the client at its result record."""
    return _run_area_lookup(req.from_, req.distance, request)


@router.get("/area", status_code=202)
def get_area(
    request: Request,
    from_: str = Query(..., alias="from", min_length=1),
    distance: str | None = None,
) -> dict:
    """Query-string form of `POST /api/area` (`?from=<guid>&distance=<km>`)."""
    return _run_area_lookup(from_, distance, request)


@router.get("/area-result/{job_id}")
def get_area_result(job_id: str) -> JSONResponse:
    try:
        job = _store().read(job_id)
    except CityRadiusError as e:
        raise _http_error(e) from e
    status_code = 200 if job.status == "complete" else 202
    return JSONResponse(status_code=status_code, content=job.model_dump(mode="json", by_alias=True))


@router.get("/area-results")
def list_area_results() -> dict:
    return {"jobs": _store().list_jobs()}


@router.get("/all-cities")
def get_all_cities() -> FileResponse:
    """Stream the catalog document as loaded at startup."""
    catalog = _catalog()
    path = catalog.source_path or resolve_project_path(get_settings().catalog.path)
    if not path.is_file():
        raise HTTPException(
            status_code=500,
            detail={"code": "CATALOG_UNAVAILABLE", "message": "Failed to load address data"},
        )
    return FileResponse(path, media_type="application/json")
