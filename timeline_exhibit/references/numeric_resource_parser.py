"""Parser for bare resource ids, without existence check."""

from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import ResourceRef


class NumericResourceParser(ReferenceParserStrategy):
    """Parses a bare integer as a resource id.

    Example: 42
    """

    def parse(self, value: str) -> ReferenceOutcome | None:
        resource_id = self.resource_id(value)
        if resource_id is None:
            return None
        return ResourceRef(resource_id)
