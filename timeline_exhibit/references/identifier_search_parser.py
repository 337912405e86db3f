"""Parser for free identifiers matched against the identifying property."""

from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import ResourceRef


class IdentifierSearchParser(ReferenceParserStrategy):
    """Resolves a free string to the first resource carrying it as identifier.

    Example: "pyramid-of-giza" with ``dcterms:identifier = pyramid-of-giza``
    """

    def parse(self, value: str) -> ReferenceOutcome | None:
        matches = self.repository.search_by_identifying_property(value)
        if not matches:
            return None
        return ResourceRef(int(matches[0].id))
