"""Knightlab spreadsheet ingestion: reading, decoding and row parsing."""

from timeline_exhibit.spreadsheet.decoders import SpreadsheetFormats, decode_spreadsheet
from timeline_exhibit.spreadsheet.row_parser import REQUIRED_HEADERS, RowParser, RowParseResult, parse_rows
from timeline_exhibit.spreadsheet.sources import SourceContent, read_source

__all__ = [
    "REQUIRED_HEADERS",
    "RowParseResult",
    "RowParser",
    "SourceContent",
    "SpreadsheetFormats",
    "decode_spreadsheet",
    "parse_rows",
    "read_source",
]
