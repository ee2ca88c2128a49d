"""
Wall-clock timing for catalog and search operations.

`measure("name")` logs the elapsed time at DEBUG on the `cityradius.performance`
logger. Enable it with `CITYRADIUS_LOG_PERFORMANCE=1`.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger("cityradius.performance")


@dataclass
class Measurement:
    name: str
    duration_ms: float = 0.0


@contextmanager
def measure(name: str) -> Iterator[Measurement]:
    m = Measurement(name=name)
    start = time.perf_counter()
    try:
        yield m
    finally:
        m.duration_ms = (time.perf_counter() - start) * 1000.0
        logger.debug("%s %.3fms", name, m.duration_ms)
