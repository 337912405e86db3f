"""Narrow interfaces to the host platform.

The exhibit engine never talks to a database or a CMS directly. It receives
a repository able to look up resources and assets, and an HTML sanitizer.
Lookups answer with Found or NotFound instead of raising, so callers decide
locally whether a miss is an error (spreadsheet rows) or just an absent
value (manual slides, sorting).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """Successful lookup."""
    value: T


@dataclass(frozen=True)
class NotFound:
    """Failed lookup for the given identifier."""
    identifier: int | str


Lookup = Union[Found[T], NotFound]


class Resource(Protocol):
    """An internal resource (item, media...) of the host platform."""

    @property
    def id(self) -> int:
        ...

    def property_value(self, name: str) -> str | None:
        """Return the first value of a property term, or None."""
        ...


class Asset(Protocol):
    """An internal asset (uploaded file) of the host platform."""

    @property
    def id(self) -> int:
        ...


class ResourceRepository(Protocol):
    """Read access to resources and assets."""

    def lookup_resource(self, resource_id: int) -> Lookup[Resource]:
        ...

    def lookup_asset(self, asset_id: int) -> Lookup[Asset]:
        ...

    def search_by_identifying_property(self, value: str) -> list[Resource]:
        """Return resources whose identifying property equals value."""
        ...


class HtmlSanitizer(Protocol):
    """Turns untrusted markup into safe markup."""

    def purify(self, markup: str) -> str:
        ...
