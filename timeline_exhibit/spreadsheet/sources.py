"""Reading spreadsheet bytes from a url or from the local upload directory."""

from __future__ import annotations

import re
from dataclasses import dataclass

import requests

from timeline_exhibit.config import ExhibitConfig
from timeline_exhibit.errors import SourceError
from timeline_exhibit.ingestion_common import build_session, log_info

# Control characters and path/shell metacharacters. A local name is a bare
# file name inside the configured directory.
_FORBIDDEN_RE = re.compile(r"[\x00-\x1f\x7f/\\?<>:*%|\"'`&;#+^$]")


@dataclass(frozen=True)
class SourceContent:
    """Raw spreadsheet bytes and what is known about their format."""
    content: bytes
    media_type: str | None
    location: str


def is_url(location: str) -> bool:
    return location.startswith(("https:", "http:"))


def read_source(
    location: str,
    config: ExhibitConfig,
    session: requests.Session | None = None,
) -> SourceContent:
    """Read a spreadsheet from a url or a local file name.

    Args:
        location: http(s) url, or a file name relative to config.local_path
        config: Exhibit configuration
        session: requests session for remote files

    Returns:
        SourceContent with the bytes and the media type when the server
        declared one

    Raises:
        SourceError: The location is refused, missing, unreadable or empty
    """
    location = (location or "").strip()
    if not location:
        raise SourceError("No spreadsheet file was set.")
    if is_url(location):
        return _read_url(location, config, session)
    return _read_local(location, config)


def _read_url(url: str, config: ExhibitConfig, session: requests.Session | None) -> SourceContent:
    session = session or build_session(config)
    try:
        resp = session.get(url, timeout=config.request_timeout_seconds)
    except requests.RequestException as e:
        raise SourceError(f"The spreadsheet url cannot be fetched: {e}") from e

    if resp.status_code != 200:
        raise SourceError(f"The spreadsheet url cannot be fetched: HTTP {resp.status_code}.")
    if not resp.content:
        raise SourceError("The spreadsheet file is empty.")

    content_type = (resp.headers.get("Content-Type") or "").split(";", 1)[0].strip().lower()
    log_info(f"Fetched spreadsheet {url} ({len(resp.content)} bytes, {content_type or 'no media type'})")
    return SourceContent(content=resp.content, media_type=content_type or None, location=url)


def _read_local(name: str, config: ExhibitConfig) -> SourceContent:
    if config.local_path is None:
        raise SourceError("A spreadsheet file path was set, but no local directory is configured.")
    if ".." in name:
        raise SourceError('The spreadsheet file path cannot contain a double "." in its path for security.')
    if _FORBIDDEN_RE.search(name):
        raise SourceError("The spreadsheet file path contains forbidden characters.")

    path = config.local_path / name
    try:
        if not path.is_file():
            raise SourceError("The spreadsheet file is not readable.")
        if not path.stat().st_size:
            raise SourceError("The spreadsheet file is empty.")
        content = path.read_bytes()
    except OSError as e:
        raise SourceError("The spreadsheet file is not readable.") from e

    log_info(f"Read spreadsheet {path} ({len(content)} bytes)")
    return SourceContent(content=content, media_type=None, location=str(path))
