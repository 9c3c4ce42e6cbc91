"""
PNG2PDF — Conversion step logger with duration tracking.

LOG_LEVEL (default INFO) sets the verbosity of the "png2pdf" logger.
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Generator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("png2pdf")
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())


@contextmanager
def step_timer(step_name: str) -> Generator[None, None, None]:
    """Log when a conversion step starts and ends, and how long it ran."""
    logger.debug("▶ %s", step_name)
    start = time.perf_counter()
    ok = False
    try:
        yield
        ok = True
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if ok:
            logger.info("✔ %s — %.0f ms", step_name, elapsed_ms)
        else:
            logger.warning("✗ %s — aborted after %.0f ms", step_name, elapsed_ms)
