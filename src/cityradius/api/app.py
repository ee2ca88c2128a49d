# src/cityradius/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and loads the address catalog at startup,
so a missing or malformed catalog stops the server before it accepts requests.
Business logic lives in `cityradius.api.routes` and the `search` / `lookups` packages.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from cityradius.config.settings import get_settings
from cityradius.core.logging import configure_logging

from . import routes

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    catalog = routes._catalog()
    if not get_settings().api.token:
        logger.warning("api.token is not set; API authentication is disabled.")
    logger.info("Serving %d addresses", len(catalog))
    yield


app = FastAPI(title="CityRadius API", version="0.1.0", lifespan=lifespan)

# Configure via env: CITYRADIUS_CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000"
cors_origins = [s.strip() for s in os.getenv("CITYRADIUS_CORS_ORIGINS", "").split(",") if s.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

app.include_router(routes.router)
