"""Deterministic in-memory repository.

Used by the command line (loaded from a JSON catalog) and by the tests. A
catalog file looks like::

    {
        "resources": [
            {"id": 1, "properties": {"dcterms:identifier": ["pyramid"],
                                     "dcterms:date": ["-2560"]}}
        ],
        "assets": [{"id": 7, "name": "banner.png"}]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from timeline_exhibit.collaborators import Found, Lookup, NotFound

DEFAULT_IDENTIFIER_PROPERTY = "dcterms:identifier"


@dataclass(frozen=True)
class MemoryResource:
    id: int
    properties: dict[str, list[str]] = field(default_factory=dict)

    def property_value(self, name: str) -> str | None:
        values = self.properties.get(name) or []
        return values[0] if values else None


@dataclass(frozen=True)
class MemoryAsset:
    id: int
    name: str = ""


class InMemoryRepository:
    """ResourceRepository backed by dictionaries."""

    def __init__(
        self,
        resources: list[MemoryResource] | None = None,
        assets: list[MemoryAsset] | None = None,
        identifier_property: str = DEFAULT_IDENTIFIER_PROPERTY,
    ):
        self.resources = {r.id: r for r in resources or []}
        self.assets = {a.id: a for a in assets or []}
        self.identifier_property = identifier_property

    def lookup_resource(self, resource_id: int) -> Lookup[MemoryResource]:
        resource = self.resources.get(int(resource_id))
        return Found(resource) if resource is not None else NotFound(resource_id)

    def lookup_asset(self, asset_id: int) -> Lookup[MemoryAsset]:
        asset = self.assets.get(int(asset_id))
        return Found(asset) if asset is not None else NotFound(asset_id)

    def search_by_identifying_property(self, value: str) -> list[MemoryResource]:
        return [
            resource
            for resource in self.resources.values()
            if value in resource.properties.get(self.identifier_property, [])
        ]

    @classmethod
    def from_catalog(
        cls,
        catalog: dict[str, Any],
        identifier_property: str = DEFAULT_IDENTIFIER_PROPERTY,
    ) -> InMemoryRepository:
        """Build a repository from a catalog dictionary."""
        resources = []
        for entry in catalog.get("resources", []):
            properties = {
                term: [str(v) for v in (values if isinstance(values, list) else [values])]
                for term, values in (entry.get("properties") or {}).items()
            }
            resources.append(MemoryResource(id=int(entry["id"]), properties=properties))
        assets = [
            MemoryAsset(id=int(entry["id"]), name=str(entry.get("name", "")))
            for entry in catalog.get("assets", [])
        ]
        return cls(resources, assets, identifier_property)

    @classmethod
    def from_json_file(
        cls,
        path: Path,
        identifier_property: str = DEFAULT_IDENTIFIER_PROPERTY,
    ) -> InMemoryRepository:
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_catalog(json.load(f), identifier_property)
