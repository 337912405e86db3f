"""Timeline exhibit ingestion.

Normalizes the slides of a chronological exhibit, entered by hand or
imported from a Knightlab spreadsheet, and orders them for display.
"""

from timeline_exhibit.chronology import ChronologicalComparator
from timeline_exhibit.config import ExhibitConfig, load_exhibit_config
from timeline_exhibit.date_token import DateToken, compare_tokens, parse_date_text, parse_partial_date
from timeline_exhibit.errors import ErrorKind, ErrorRecord, SchemaError, SourceError
from timeline_exhibit.exhibit import (
    ExhibitIngestion,
    IngestionResult,
    ManualSource,
    SpreadsheetSource,
    fulltext,
)
from timeline_exhibit.normalizer import SlideNormalizer
from timeline_exhibit.slide import Slide, SlideDraft, SlideKind

__all__ = [
    "ChronologicalComparator",
    "DateToken",
    "ErrorKind",
    "ErrorRecord",
    "ExhibitConfig",
    "ExhibitIngestion",
    "IngestionResult",
    "ManualSource",
    "SchemaError",
    "Slide",
    "SlideDraft",
    "SlideKind",
    "SlideNormalizer",
    "SourceError",
    "SpreadsheetSource",
    "compare_tokens",
    "fulltext",
    "load_exhibit_config",
    "parse_date_text",
    "parse_partial_date",
]
