"""Configuration loading for exhibit ingestion."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


_DEFAULT_IDENTIFIER_PROPERTY = "dcterms:identifier"
_DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
_DEFAULT_USER_AGENT = "TimelineExhibit/1.0 (https://localhost; admin@example.com) requests"
_DEFAULT_LOG_LEVEL = "INFO"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ExhibitConfig:
    """Settings shared by one ingestion pass.

    Attributes:
        local_path: Directory local spreadsheet names are resolved in. Local
            files are refused when it is not set.
        start_date_property: Property term read on a linked resource when a
            slide has no start date of its own (e.g. "dcterms:date")
        identifier_property: Property term used to resolve free identifiers
        request_timeout_seconds: Timeout for remote spreadsheet downloads
        user_agent: User-Agent header for remote downloads
        log_level: Logging level name
    """
    local_path: Path | None = None
    start_date_property: str | None = None
    identifier_property: str = _DEFAULT_IDENTIFIER_PROPERTY
    request_timeout_seconds: int = _DEFAULT_REQUEST_TIMEOUT_SECONDS
    user_agent: str = _DEFAULT_USER_AGENT
    log_level: str = _DEFAULT_LOG_LEVEL


def _parse_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


def _parse_log_level(value: str | None) -> str:
    level = (value or "").strip().upper()
    return level if level in _LOG_LEVELS else _DEFAULT_LOG_LEVEL


def load_exhibit_config() -> ExhibitConfig:
    """Load exhibit configuration from environment variables."""
    local_path = os.getenv("EXHIBIT_LOCAL_PATH", "").strip()
    return ExhibitConfig(
        local_path=Path(local_path) if local_path else None,
        start_date_property=os.getenv("EXHIBIT_START_DATE_PROPERTY", "").strip() or None,
        identifier_property=(
            os.getenv("EXHIBIT_IDENTIFIER_PROPERTY", "").strip() or _DEFAULT_IDENTIFIER_PROPERTY
        ),
        request_timeout_seconds=_parse_int(
            os.getenv("EXHIBIT_REQUEST_TIMEOUT"),
            _DEFAULT_REQUEST_TIMEOUT_SECONDS,
        ),
        user_agent=os.getenv("EXHIBIT_USER_AGENT", "").strip() or _DEFAULT_USER_AGENT,
        log_level=_parse_log_level(os.getenv("EXHIBIT_LOG_LEVEL")),
    )
