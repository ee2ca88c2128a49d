"""
Shared-secret bearer check.

Every `/api` route depends on `require_token`. When `api.token` is unset (the
default for local development) the check is skipped.
"""

from __future__ import annotations

import hmac

from fastapi import Header, HTTPException

from cityradius.config.settings import get_settings


def require_token(authorization: str | None = Header(default=None)) -> None:
    token = get_settings().api.token
    if not token:
        return
    scheme, _, supplied = (authorization or "").partition(" ")
    # Compare bytes: headers arrive latin-1 decoded and may hold non-ASCII text.
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        supplied.strip().encode("utf-8"), token.encode("utf-8")
    ):
        raise HTTPException(
            status_code=401,
            detail={"code": "UNAUTHORIZED", "message": "Missing or invalid authentication"},
            headers={"WWW-Authenticate": "Bearer"},
        )
