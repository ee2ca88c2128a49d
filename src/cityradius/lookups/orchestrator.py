"""
Radius lookup orchestration.

Ties the catalog, the radius search and the job store together:

    begin()     validate radius + center, create the `in_progress` record
    complete()  run the search, finalize the record as `complete`
    start_lookup() = begin() + complete()

All validation happens before the first write. There are no retries: if finalizing
fails the `in_progress` record stays behind, and pollers should treat a record that
never completes as abandoned.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any, Callable

from cityradius.catalog.loader import AddressCatalog
from cityradius.config.settings import EQUATORIAL_CIRCUMFERENCE_KM
from cityradius.core.errors import InvalidRadiusError
from cityradius.core.timing import measure
from cityradius.domain.models import RadiusLookupJob
from cityradius.lookups.store import LookupJobStore
from cityradius.search.radius import find_within_radius

logger = logging.getLogger(__name__)


def parse_radius_km(value: Any, max_km: int = EQUATORIAL_CIRCUMFERENCE_KM) -> int:
    """Coerce a requested radius into whole kilometers in `1..max_km`.

    Accepts ints, integral floats and numeric strings ("12", " 12.0 ").
    """
    if isinstance(value, bool) or value is None:
        raise InvalidRadiusError(value, "distance must be an integer")

    # Python ints are unbounded; range-check before any float conversion.
    if isinstance(value, int):
        if value < 1:
            raise InvalidRadiusError(value, "distance must be 1km or greater")
        if value > max_km:
            raise InvalidRadiusError(value, f"distance cannot exceed {max_km}km")
        return value

    number: float
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as e:
            raise InvalidRadiusError(value, "distance must be an integer") from e
    else:
        raise InvalidRadiusError(value, "distance must be an integer")

    if not math.isfinite(number) or not number.is_integer():
        raise InvalidRadiusError(value, "distance must be an integer")
    if number < 1:
        raise InvalidRadiusError(value, "distance must be 1km or greater")
    if number > max_km:
        raise InvalidRadiusError(value, f"distance cannot exceed {max_km}km")
    return int(number)


def _new_job_id() -> str:
    return str(uuid.uuid4())


class RadiusLookupOrchestrator:
    def __init__(
        self,
        catalog: AddressCatalog,
        store: LookupJobStore,
        *,
        max_radius_km: int = EQUATORIAL_CIRCUMFERENCE_KM,
        id_factory: Callable[[], str] = _new_job_id,
    ):
        self._catalog = catalog
        self._store = store
        self._max_radius_km = int(max_radius_km)
        self._id_factory = id_factory

    @property
    def store(self) -> LookupJobStore:
        return self._store

    def begin(self, from_guid: str, radius: Any) -> RadiusLookupJob:
        """Validate the request and persist the initial `in_progress` record."""
        radius_km = parse_radius_km(radius, self._max_radius_km)
        center = self._catalog.require(from_guid)

        job = RadiusLookupJob(guid=self._id_factory(), from_=center, distance=radius_km)
        job = self._store.create(job)
        logger.info("Radius lookup %s started: from=%s radius_km=%d", job.guid, center.guid, radius_km)
        return job

    def complete(self, job: RadiusLookupJob) -> RadiusLookupJob:
        """Run the search for `job` and persist the `complete` record."""
        with measure("Radius lookup total") as m:
            matches = find_within_radius(job.from_, job.distance, self._catalog)
            final = job.model_copy(update={"status": "complete", "cities": [x.to_city() for x in matches]})
            try:
                final = self._store.finalize(final)
            except Exception:
                logger.exception("Radius lookup %s failed to finalize; record left in_progress", job.guid)
                raise
        logger.info("Radius lookup %s complete: %d cities in %.1fms", job.guid, len(final.cities), m.duration_ms)
        return final

    def start_lookup(self, from_guid: str, radius: Any) -> str:
        """Run a radius lookup end to end and return its job id."""
        job = self.begin(from_guid, radius)
        self.complete(job)
        return job.guid

    def read_job(self, job_id: str) -> RadiusLookupJob:
        return self._store.read(job_id)
