"""
Radius lookup job records on disk.

One JSON file per job under the lookups directory (`<job_id>.json`). Records move
through exactly two states:

- `create` writes the initial `in_progress` record and refuses to touch an existing one,
- `finalize` overwrites it once with the `complete` record.

Writes go through a temporary file so readers never observe a half-written record.
Create publishes the temp file with a hard link, which fails atomically if the target
already exists; finalize uses an atomic replace.
"""

from __future__ import annotations

import json
import logging
import os
import time
import uuid
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cityradius.core.errors import ConflictError, InvalidIdentifierError, NotFoundError, PersistenceError
from cityradius.domain.models import RadiusLookupJob

logger = logging.getLogger(__name__)


def validate_job_id(job_id: Any) -> str:
    """Return `job_id` in canonical (lower-case, hyphenated) UUID form.

    Raises `InvalidIdentifierError` for anything else, including braced or urn forms.
    """
    if not isinstance(job_id, str):
        raise InvalidIdentifierError(job_id)
    try:
        parsed = uuid.UUID(job_id)
    except ValueError as e:
        raise InvalidIdentifierError(job_id) from e
    canonical = str(parsed)
    if canonical != job_id.lower():
        raise InvalidIdentifierError(job_id)
    return canonical


class LookupJobStore:
    """A filesystem-backed store of `RadiusLookupJob` records keyed by job id."""

    def __init__(self, base_dir: Path):
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _path(self, job_id: str) -> Path:
        return self._base_dir / f"{validate_job_id(job_id)}.json"

    def _tmp_path(self, job_id: str) -> Path:
        return self._base_dir / f".{job_id}.{uuid.uuid4().hex[:8]}.tmp"

    def _write_tmp(self, job: RadiusLookupJob) -> Path:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        tmp = self._tmp_path(job.guid)
        tmp.write_text(job.model_dump_json(by_alias=True), encoding="utf-8")
        return tmp

    def create(self, job: RadiusLookupJob) -> RadiusLookupJob:
        """Persist a new record. Raises `ConflictError` if the id is taken."""
        path = self._path(job.guid)
        now = int(time.time())
        job = job.model_copy(update={"created_at_unix": job.created_at_unix or now, "updated_at_unix": now})
        try:
            tmp = self._write_tmp(job)
        except OSError as e:
            raise PersistenceError(job.guid, f"create failed ({e})") from e
        try:
            os.link(tmp, path)
        except FileExistsError as e:
            raise ConflictError(job.guid, "a record with this id already exists") from e
        except OSError as e:
            raise PersistenceError(job.guid, f"create failed ({e})") from e
        finally:
            tmp.unlink(missing_ok=True)
        logger.debug("Created radius lookup record %s", path)
        return job

    def finalize(self, job: RadiusLookupJob) -> RadiusLookupJob:
        """Overwrite an `in_progress` record with its `complete` state."""
        if job.status != "complete":
            raise ValueError(f"finalize expects a complete record, got status '{job.status}'")
        path = self._path(job.guid)
        current = self.read(job.guid)
        if current.status == "complete":
            raise ConflictError(job.guid, "record is already complete")

        job = job.model_copy(
            update={"created_at_unix": current.created_at_unix, "updated_at_unix": int(time.time())}
        )
        try:
            tmp = self._write_tmp(job)
            tmp.replace(path)
        except OSError as e:
            raise PersistenceError(job.guid, f"finalize failed ({e})") from e
        logger.debug("Finalized radius lookup record %s", path)
        return job

    def read(self, job_id: str) -> RadiusLookupJob:
        path = self._path(job_id)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NotFoundError(job_id) from e
        except OSError as e:
            raise PersistenceError(job_id, f"read failed ({e})") from e
        try:
            return RadiusLookupJob.model_validate_json(text)
        except ValidationError as e:
            raise PersistenceError(job_id, f"stored record is corrupt ({e.error_count()} errors)") from e

    def list_jobs(self) -> list[dict[str, Any]]:
        """Summaries of every stored record, newest first. Unreadable files are skipped."""
        if not self._base_dir.exists():
            return []
        jobs = []
        for p in sorted(self._base_dir.glob("*.json")):
            try:
                raw = json.loads(p.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                logger.warning("Skipping unreadable radius lookup record %s", p)
                continue
            if not isinstance(raw, dict):
                continue
            created = raw.get("created_at_unix")
            cities = raw.get("cities") or []
            if (created is not None and (isinstance(created, bool) or not isinstance(created, int))) or not isinstance(
                cities, list
            ):
                logger.warning("Skipping malformed radius lookup record %s", p)
                continue
            src = raw.get("from") or {}
            jobs.append(
                {
                    "guid": raw.get("guid"),
                    "status": raw.get("status"),
                    "from": src.get("guid") if isinstance(src, dict) else src,
                    "distance": raw.get("distance"),
                    "city_count": len(cities),
                    "created_at_unix": created,
                    "updated_at_unix": raw.get("updated_at_unix"),
                }
            )
        jobs.sort(key=lambda j: j["created_at_unix"] or 0, reverse=True)
        return jobs
