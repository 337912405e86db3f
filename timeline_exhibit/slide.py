"""Slide records and media reference variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from timeline_exhibit.date_token import DateToken


class SlideKind(str, Enum):
    """Slide type. An empty type means an event."""
    EVENT = "event"
    ERA = "era"
    TITLE = "title"

    @classmethod
    def from_value(cls, value: str | None) -> SlideKind | None:
        """Return the kind for a type string, EVENT when empty, None when unknown."""
        if value is None or not str(value).strip():
            return cls.EVENT
        try:
            return cls(str(value).strip())
        except ValueError:
            return None


@dataclass(frozen=True)
class ResourceRef:
    id: int


@dataclass(frozen=True)
class AssetRef:
    id: int


@dataclass(frozen=True)
class ExternalRef:
    value: str


@dataclass(frozen=True)
class ExternalUrlRef:
    url: str


@dataclass(frozen=True)
class ColorRef:
    value: str


@dataclass(frozen=True)
class UnresolvedRef:
    """A value that looked like an internal reference but was not found."""
    value: str
    reason: str


MediaRef = Union[ResourceRef, AssetRef, ExternalRef]
BackgroundRef = Union[ResourceRef, AssetRef, ExternalUrlRef, ColorRef]


@dataclass
class SlideDraft:
    """Raw slide fields, before normalization.

    Manual slides fill the raw reference fields (``resource``, ``asset``,
    ``external`` and their background counterparts) and date text or date
    components. Spreadsheet rows fill the structured ``media``,
    ``background``, ``start`` and ``end`` fields directly.
    """
    kind: SlideKind | str | None = None
    start: DateToken | None = None
    end: DateToken | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_components: tuple = ()
    end_components: tuple = ()
    display_date_start: str | None = None
    display_date_end: str | None = None
    headline: str | None = None
    body_html: str | None = None
    caption: str | None = None
    credit: str | None = None
    media: MediaRef | None = None
    background: BackgroundRef | None = None
    resource: Any = None
    asset: Any = None
    external: Any = None
    background_resource: Any = None
    background_asset: Any = None
    background_external: Any = None
    background_color: Any = None
    group: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SlideDraft:
        """Read a manually entered slide in the persisted block shape."""
        def text(key: str) -> str | None:
            value = data.get(key)
            return None if value is None else str(value)

        start_components = tuple(data.get(f"start_{name}") for name in ("year", "month", "day", "time"))
        end_components = tuple(data.get(f"end_{name}") for name in ("year", "month", "day", "time"))
        return cls(
            kind=text("type"),
            start_date=text("start_date"),
            end_date=text("end_date"),
            start_components=start_components if any(v is not None for v in start_components) else (),
            end_components=end_components if any(v is not None for v in end_components) else (),
            display_date_start=text("start_display_date") or text("display_date"),
            display_date_end=text("end_display_date"),
            headline=text("headline"),
            body_html=text("html"),
            caption=text("caption"),
            credit=text("credit"),
            resource=data.get("resource"),
            asset=data.get("asset"),
            external=data.get("external"),
            background_resource=data.get("background_resource"),
            background_asset=data.get("background_asset"),
            background_external=data.get("background_external"),
            background_color=data.get("background_color"),
            group=text("group"),
        )


@dataclass
class Slide:
    """A normalized timeline slide."""
    kind: SlideKind = SlideKind.EVENT
    start: DateToken | None = None
    end: DateToken | None = None
    display_date_start: str | None = None
    display_date_end: str | None = None
    headline: str | None = None
    body_html: str | None = None
    caption: str | None = None
    credit: str | None = None
    media: MediaRef | None = None
    background: BackgroundRef | None = None
    group: str | None = None

    def has_content(self) -> bool:
        """True when at least one displayable field is set."""
        return any(
            value is not None
            for value in (
                self.headline,
                self.body_html,
                self.caption,
                self.credit,
                self.media,
                self.background,
                self.start,
                self.end,
                self.display_date_start,
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted block shape."""
        media = self.media
        background = self.background
        return {
            "resource": media.id if isinstance(media, ResourceRef) else None,
            "asset": media.id if isinstance(media, AssetRef) else None,
            "external": media.value if isinstance(media, ExternalRef) else None,
            "type": self.kind.value,
            "start_date": str(self.start) if self.start else None,
            "start_display_date": self.display_date_start,
            "end_date": str(self.end) if self.end else None,
            "end_display_date": self.display_date_end,
            "headline": self.headline,
            "html": self.body_html,
            "caption": self.caption,
            "credit": self.credit,
            "background_resource": background.id if isinstance(background, ResourceRef) else None,
            "background_asset": background.id if isinstance(background, AssetRef) else None,
            "background_external": background.url if isinstance(background, ExternalUrlRef) else None,
            "background_color": background.value if isinstance(background, ColorRef) else None,
            "group": self.group,
        }
