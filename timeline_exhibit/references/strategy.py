"""Abstract base class for reference parsing strategies."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from timeline_exhibit.collaborators import ResourceRepository
from timeline_exhibit.slide import AssetRef, ExternalRef, ResourceRef, UnresolvedRef

ReferenceOutcome = ResourceRef | AssetRef | ExternalRef | UnresolvedRef

_ASSET_PATH_RE = re.compile(r"^asset/(\d+)$")


class ReferenceParserStrategy(ABC):
    """Interface for reference parsing strategies.

    A strategy recognizes one shape of raw value. It returns None when the
    value does not have its shape, so the next strategy can be tried.
    """

    def __init__(self, repository: ResourceRepository | None = None):
        self.repository = repository

    @staticmethod
    def resource_id(value: str) -> int | None:
        """Return the id for a bare integer, else None."""
        return int(value) if value.isdigit() else None

    @staticmethod
    def asset_id(value: str) -> int | None:
        """Return the id for an ``asset/<digits>`` value, else None."""
        m = _ASSET_PATH_RE.match(value)
        return int(m.group(1)) if m else None

    @abstractmethod
    def parse(self, value: str) -> ReferenceOutcome | None:
        """Parse a trimmed, non-empty raw value.

        Args:
            value: The raw cell or field value

        Returns:
            A reference outcome, or None when the value has another shape
        """
        pass
