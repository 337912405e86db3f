"""Media and background reference resolution.

Raw values (spreadsheet cells or form fields) are classified by trying a
list of parser strategies in order: resource ids, asset paths, urls,
identifiers and finally the literal value.
"""

from timeline_exhibit.references.factory import ReferenceParserFactory, ReferenceParsers
from timeline_exhibit.references.orchestrators import (
    DirectReferenceResolver,
    LookupReferenceResolver,
    ReferenceResolver,
    as_background,
    resolve_media,
)
from timeline_exhibit.references.strategy import ReferenceParserStrategy

__all__ = [
    "DirectReferenceResolver",
    "LookupReferenceResolver",
    "ReferenceParserFactory",
    "ReferenceParserStrategy",
    "ReferenceParsers",
    "ReferenceResolver",
    "as_background",
    "resolve_media",
]
