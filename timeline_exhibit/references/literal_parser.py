"""Fallback parser keeping the raw value."""

from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import ExternalRef


class LiteralParser(ReferenceParserStrategy):
    """Keeps any value as an external string. Always matches."""

    def parse(self, value: str) -> ReferenceOutcome | None:
        return ExternalRef(value)
