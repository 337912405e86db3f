"""Slide normalization: defaults, trimming, sanitizing and references."""

from __future__ import annotations

from timeline_exhibit.collaborators import HtmlSanitizer, ResourceRepository
from timeline_exhibit.date_token import DateToken, parse_date_text, parse_partial_date
from timeline_exhibit.errors import ErrorKind, ErrorRecord
from timeline_exhibit.ingestion_common import log_warning
from timeline_exhibit.references import LookupReferenceResolver, as_background
from timeline_exhibit.references.strategy import ReferenceParserStrategy
from timeline_exhibit.sanitizer import fix_end_of_line
from timeline_exhibit.slide import (
    AssetRef,
    ColorRef,
    ResourceRef,
    Slide,
    SlideDraft,
    SlideKind,
    UnresolvedRef,
)


def _clean(value) -> str | None:
    """Trim a value; empty and whitespace-only values become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _manual_id(value) -> int | None:
    text = _clean(value)
    if text is None or isinstance(value, bool):
        return None
    return ReferenceParserStrategy.resource_id(text)


class SlideNormalizer:
    """Turns drafts from any input path into canonical slides.

    Args:
        repository: Used to resolve the free ``external`` reference of
            manual slides
        sanitizer: Purifier applied to html, caption and credit
    """

    def __init__(self, repository: ResourceRepository, sanitizer: HtmlSanitizer):
        self.repository = repository
        self.sanitizer = sanitizer
        self.resolver = LookupReferenceResolver(repository)

    def normalize(self, draft: SlideDraft, errors: list[ErrorRecord] | None = None) -> Slide | None:
        """Normalize a draft.

        Args:
            draft: Raw slide fields
            errors: List receiving date errors of manual slides

        Returns:
            The slide, or None when it has no content at all
        """
        if errors is None:
            errors = []

        kind = draft.kind if isinstance(draft.kind, SlideKind) else SlideKind.from_value(draft.kind)
        if kind is None:
            log_warning(f'Unknown slide type "{draft.kind}", using event')
            kind = SlideKind.EVENT

        slide = Slide(
            kind=kind,
            start=self._date(draft.start, draft.start_date, draft.start_components, "start", errors),
            end=self._date(draft.end, draft.end_date, draft.end_components, "end", errors),
            display_date_start=_clean(draft.display_date_start),
            display_date_end=_clean(draft.display_date_end),
            headline=_clean(draft.headline),
            body_html=self._purify(draft.body_html),
            caption=self._purify(draft.caption),
            credit=self._purify(draft.credit),
            media=draft.media or self._media(draft),
            background=draft.background or self._background(draft),
            group=_clean(draft.group),
        )
        return slide if slide.has_content() else None

    def _purify(self, value) -> str | None:
        text = _clean(value)
        if text is None:
            return None
        return _clean(fix_end_of_line(self.sanitizer.purify(text)))

    @staticmethod
    def _date(token, text, components, label: str, errors: list[ErrorRecord]) -> DateToken | None:
        if token is not None:
            return token
        try:
            if _clean(text) is not None:
                return parse_date_text(text, label=label)
            if components:
                return parse_partial_date(*components, label=label)
        except ValueError as e:
            errors.append(ErrorRecord(kind=ErrorKind.ROW, field=f"{label}_date", message=str(e)))
        return None

    def _resolve_external(self, value, field: str):
        outcome = self.resolver.resolve(value)
        if isinstance(outcome, UnresolvedRef):
            log_warning(f"Slide {field}: {outcome.reason} It is ignored.")
            return None
        return outcome

    def _media(self, draft: SlideDraft):
        resource_id = _manual_id(draft.resource)
        if resource_id is not None:
            return ResourceRef(resource_id)
        asset_id = _manual_id(draft.asset)
        if asset_id is not None:
            return AssetRef(asset_id)
        return self._resolve_external(draft.external, "external")

    def _background(self, draft: SlideDraft):
        resource_id = _manual_id(draft.background_resource)
        if resource_id is not None:
            return ResourceRef(resource_id)
        asset_id = _manual_id(draft.background_asset)
        if asset_id is not None:
            return AssetRef(asset_id)
        background = as_background(self._resolve_external(draft.background_external, "background_external"))
        if background is not None:
            return background
        color = _clean(draft.background_color)
        return ColorRef(color) if color else None
