"""Exception hierarchy for cityradius."""

from __future__ import annotations

from typing import Any


class CityRadiusError(Exception):
    """Base exception for all cityradius errors."""


class LoadError(CityRadiusError):
    """The address catalog could not be read or is malformed."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to load address catalog from {path}: {detail}")


class UnknownAddressError(CityRadiusError):
    """No catalog address has the given guid."""

    def __init__(self, guid: str):
        self.guid = guid
        super().__init__(f"Unknown address: '{guid}'")


class InvalidRadiusError(CityRadiusError):
    """The requested radius is not a whole number of kilometers in range."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid radius {value!r}: {reason}")


class InvalidIdentifierError(CityRadiusError):
    """A job identifier is not a canonical UUID string."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid job id: {value!r}")


class NotFoundError(CityRadiusError):
    """No radius lookup record exists for the job id."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Radius lookup not found: '{job_id}'")


class ConflictError(CityRadiusError):
    """The write would clobber an existing or already-complete record."""

    def __init__(self, job_id: str, detail: str):
        self.job_id = job_id
        self.detail = detail
        super().__init__(f"Radius lookup '{job_id}': {detail}")


class PersistenceError(CityRadiusError):
    """Reading or writing a radius lookup record failed."""

    def __init__(self, job_id: str, detail: str):
        self.job_id = job_id
        self.detail = detail
        super().__init__(f"Radius lookup '{job_id}' storage failure: {detail}")
