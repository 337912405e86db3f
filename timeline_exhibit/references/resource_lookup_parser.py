"""Parser for bare resource ids checked against the repository."""

from timeline_exhibit.collaborators import Found
from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import ResourceRef, UnresolvedRef


class ResourceLookupParser(ReferenceParserStrategy):
    """Parses a bare integer and reads the resource it points to.

    A missing resource is reported as unresolved rather than falling through
    to the literal parser: a number is never kept as an external value.
    """

    def parse(self, value: str) -> ReferenceOutcome | None:
        resource_id = self.resource_id(value)
        if resource_id is None:
            return None
        result = self.repository.lookup_resource(resource_id)
        if isinstance(result, Found):
            return ResourceRef(int(result.value.id))
        return UnresolvedRef(value, f'The Media "{value}" is an unknown resource.')
