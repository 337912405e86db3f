"""Parser for absolute urls."""

from urllib.parse import urlparse

from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import ExternalRef


class AbsoluteUrlParser(ReferenceParserStrategy):
    """Keeps an absolute url (scheme and host) as an external value.

    Example: https://example.org/image.jpg
    """

    def parse(self, value: str) -> ReferenceOutcome | None:
        if any(c.isspace() for c in value):
            return None
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            return None
        return ExternalRef(value)
