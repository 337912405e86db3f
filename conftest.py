"""Shared fixtures for timeline_exhibit tests."""

import pytest

from timeline_exhibit.memory_repository import InMemoryRepository, MemoryAsset, MemoryResource
from timeline_exhibit.spreadsheet.row_parser import REQUIRED_HEADERS


class IdentitySanitizer:
    """Sanitizer returning markup unchanged, to observe other transforms."""

    def purify(self, markup):
        return markup


@pytest.fixture
def repository():
    """Repository with a few resources and one asset."""
    return InMemoryRepository(
        resources=[
            MemoryResource(1, {"dcterms:identifier": ["pyramid"], "dcterms:date": ["-2560"]}),
            MemoryResource(5, {"dcterms:date": ["1900-05-03"]}),
            MemoryResource(42, {"dcterms:identifier": ["moon-landing"], "dcterms:date": ["1969-07-20"]}),
        ],
        assets=[MemoryAsset(7, "banner.png")],
    )


@pytest.fixture
def sanitizer():
    return IdentitySanitizer()


@pytest.fixture
def make_row():
    """Build a Knightlab data row from column values, in header order."""
    def _make_row(**cells):
        values = {name.replace(" ", "_").lower(): "" for name in REQUIRED_HEADERS}
        values.update(cells)
        return [values[name.replace(" ", "_").lower()] for name in REQUIRED_HEADERS]
    return _make_row


@pytest.fixture
def header():
    return list(REQUIRED_HEADERS)
