"""Shared utilities for exhibit ingestion.

This module contains:
- logging setup (stderr handler + optional per-run log file) and the
  log_info / log_warning / log_error helpers used across the package
- the HTTP session used to download remote spreadsheets
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

import requests

from timeline_exhibit.config import ExhibitConfig

LOGGER_NAME = "timeline_exhibit"

_FORMAT = logging.Formatter("%(asctime)sZ\t%(levelname)s\t%(message)s")

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = "INFO", log_dir: str | Path | None = None) -> str:
    """Attach handlers to the package logger.

    Args:
        level: Logging level name
        log_dir: Directory for a per-run log file; INGEST_LOG_DIR is used when
            not given, and no file is written when neither is set

    Returns:
        The run id used to name the log file
    """
    run_id = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream = logging.StreamHandler()
    stream.setFormatter(_FORMAT)
    logger.addHandler(stream)

    log_dir = log_dir or os.getenv("INGEST_LOG_DIR")
    if log_dir:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logs_dir / f"exhibit_{run_id}.log", encoding="utf-8")
        file_handler.setFormatter(_FORMAT)
        logger.addHandler(file_handler)

    return run_id


def log_info(msg: str) -> None:
    logger.info(msg)


def log_warning(msg: str) -> None:
    logger.warning(msg)


def log_error(msg: str) -> None:
    logger.error(msg)


def build_session(config: ExhibitConfig) -> requests.Session:
    """Create a requests session with a proper User-Agent.

    No retry adapter is mounted: a failed download is reported once.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session
