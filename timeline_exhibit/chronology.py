"""Chronological ordering of slides."""

from __future__ import annotations

from functools import cmp_to_key

from timeline_exhibit.collaborators import Found, ResourceRepository
from timeline_exhibit.date_token import compare_date_text
from timeline_exhibit.slide import ResourceRef, Slide, SlideKind


class ChronologicalComparator:
    """Total order over slides.

    1. The title is always last.
    2. Events come before eras.
    3. Slides without an effective date come first.
    4. Equal effective dates are ordered by headline.
    5. Other dates are compared component by component, negative years
       first.

    The effective date is the start date of the slide. When it has none, the
    date can be read from the property ``item_date_property`` of the resource
    used as media.

    Args:
        repository: Used to read resource dates
        item_date_property: Property term holding a resource date, or None
    """

    def __init__(self, repository: ResourceRepository | None = None, item_date_property: str | None = None):
        self.repository = repository
        self.item_date_property = item_date_property
        self._resource_dates: dict[int, str | None] = {}

    def effective_date(self, slide: Slide) -> str | None:
        if slide.start is not None:
            return str(slide.start)
        if not self.item_date_property or self.repository is None or not isinstance(slide.media, ResourceRef):
            return None
        resource_id = slide.media.id
        if resource_id not in self._resource_dates:
            result = self.repository.lookup_resource(resource_id)
            value = None
            if isinstance(result, Found):
                value = result.value.property_value(self.item_date_property)
            self._resource_dates[resource_id] = (str(value).strip() or None) if value is not None else None
        return self._resource_dates[resource_id]

    def compare(self, a: Slide, b: Slide) -> int:
        """Return -1, 0 or 1."""
        a_title = a.kind == SlideKind.TITLE
        b_title = b.kind == SlideKind.TITLE
        if a_title or b_title:
            if a_title and b_title:
                return 0
            return 1 if a_title else -1

        if a.kind != b.kind:
            return -1 if a.kind == SlideKind.EVENT else 1

        date_a = self.effective_date(a)
        date_b = self.effective_date(b)
        if date_a is None and date_b is not None:
            return -1
        if date_a is not None and date_b is None:
            return 1

        result = 0 if date_a == date_b else compare_date_text(date_a, date_b)
        if result == 0:
            headline_a = a.headline or ""
            headline_b = b.headline or ""
            if headline_a == headline_b:
                return 0
            return -1 if headline_a < headline_b else 1
        return result

    def sort(self, slides: list[Slide]) -> list[Slide]:
        """Return a new, stably sorted list."""
        return sorted(slides, key=cmp_to_key(self.compare))
