"""Conversion of Knightlab spreadsheet rows into slide drafts.

The first non-empty row is the header. It must hold the 19 Knightlab column
names, in any order; trailing columns beyond the 19th are ignored. Every data
row is checked as a whole: all its problems are reported, then the row is
skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from timeline_exhibit.collaborators import ResourceRepository
from timeline_exhibit.date_token import DateToken, parse_partial_date
from timeline_exhibit.errors import (
    ErrorKind,
    ErrorRecord,
    HierarchyViolation,
    InvalidDateComponent,
    SchemaError,
)
from timeline_exhibit.ingestion_common import log_info, log_warning
from timeline_exhibit.references import LookupReferenceResolver, as_background
from timeline_exhibit.slide import SlideDraft, SlideKind, UnresolvedRef

REQUIRED_HEADERS = (
    "Year",
    "Month",
    "Day",
    "Time",
    "End Year",
    "End Month",
    "End Day",
    "End Time",
    "Display Date",
    "Headline",
    "Text",
    "Media",
    "Media Credit",
    "Media Caption",
    "Media Thumbnail",
    "Alt Text",
    "Type",
    "Group",
    "Background",
)

START_COLUMNS = {"year": "Year", "month": "Month", "day": "Day", "time": "Time"}
END_COLUMNS = {"year": "End Year", "month": "End Month", "day": "End Day", "time": "End Time"}


@dataclass
class RowParseResult:
    """Drafts built from the valid rows and the errors of the others."""
    drafts: list[SlideDraft] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)


def _cell(value) -> str:
    return "" if value is None else str(value).strip()


def _is_empty_row(row: Sequence) -> bool:
    return not any(_cell(value) for value in row)


def validate_headers(header: Sequence) -> list[str]:
    """Check a header row and return the column names in use.

    Raises:
        SchemaError: Duplicated names, or a set of names different from the
            Knightlab one
    """
    names = [_cell(value) for value in header]

    seen: set[str] = set()
    duplicates: list[str] = []
    for name in names:
        if not name:
            continue
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise SchemaError(f"Some headers are duplicated: {', '.join(duplicates)}.")

    names = names[: len(REQUIRED_HEADERS)]
    missing = [name for name in REQUIRED_HEADERS if name not in names]
    unexpected = [name for name in names if name and name not in REQUIRED_HEADERS]
    if missing or unexpected:
        raise SchemaError(
            "The exact list of 19 headers of a Knightlab spreadsheet should be used: "
            f"check {', '.join(missing + unexpected)}."
        )
    return names


def rows_with_headers(rows: Iterable[Sequence]) -> list[dict[str, str]]:
    """Drop empty rows and map each data row to the header names.

    Rows shorter than the header are padded with empty cells, longer ones
    are truncated.

    Raises:
        SchemaError: The header row is invalid
    """
    rows = [row for row in rows if not _is_empty_row(row)]
    if len(rows) < 2:
        return []

    names = validate_headers(rows[0])
    width = len(names)
    mapped = []
    for row in rows[1:]:
        cells = [_cell(value) for value in row[:width]]
        cells += [""] * (width - len(cells))
        mapped.append(dict(zip(names, cells)))
    return mapped


class RowParser:
    """Builds slide drafts from Knightlab rows.

    Media and Background cells are resolved against the repository: bare
    numbers must be existing resources and ``asset/<id>`` values existing
    assets.
    """

    def __init__(self, repository: ResourceRepository):
        self.resolver = LookupReferenceResolver(repository)

    def parse(self, rows: Iterable[Sequence]) -> RowParseResult:
        """Parse all rows, header included.

        Raises:
            SchemaError: The header row is invalid
        """
        result = RowParseResult()
        for index, row in enumerate(rows_with_headers(rows), start=1):
            draft, errors = self.parse_row(row, index)
            result.errors.extend(errors)
            if draft is not None:
                result.drafts.append(draft)

        if result.errors:
            log_warning(f"Spreadsheet: {len(result.errors)} row errors")
        log_info(f"Spreadsheet: {len(result.drafts)} valid rows")
        return result

    def parse_row(self, row: dict[str, str], index: int) -> tuple[SlideDraft | None, list[ErrorRecord]]:
        """Convert one mapped row.

        Returns:
            (draft, errors); the draft is None as soon as one error occurred
        """
        errors: list[ErrorRecord] = []

        def row_error(column: str, message: str, kind: ErrorKind = ErrorKind.ROW) -> None:
            errors.append(ErrorRecord(kind=kind, field=column, message=message, row_index=index))

        media = self.resolver.resolve(row["Media"])
        if isinstance(media, UnresolvedRef):
            row_error("Media", f"Column Media is invalid: {media.reason}", ErrorKind.REFERENCE)
            media = None

        kind = SlideKind.from_value(row["Type"])
        if kind is None:
            row_error("Type", f'The Type "{row["Type"]}" is unmanaged.')

        start = self._date(row, START_COLUMNS, "start", row_error)
        end = self._date(row, END_COLUMNS, "end", row_error)

        if kind != SlideKind.TITLE and not row["Year"]:
            row_error("Year", "A start year is required, except for title.")
        if kind == SlideKind.ERA and (start is None or end is None):
            row_error("Type", "Type era requires start and end date.")

        background = self.resolver.resolve(row["Background"])
        if isinstance(background, UnresolvedRef):
            row_error("Background", f"Column Background is invalid: {background.reason}", ErrorKind.REFERENCE)
            background = None

        if errors:
            return None, errors

        return SlideDraft(
            kind=kind,
            start=start,
            end=end,
            display_date_start=row["Display Date"],
            headline=row["Headline"],
            body_html=row["Text"],
            caption=row["Media Caption"],
            credit=row["Media Credit"],
            media=media,
            background=as_background(background),
            group=row["Group"],
        ), errors

    @staticmethod
    def _date(row: dict[str, str], columns: dict[str, str], label: str, row_error) -> DateToken | None:
        try:
            return parse_partial_date(
                row[columns["year"]],
                row[columns["month"]],
                row[columns["day"]],
                row[columns["time"]],
                label=label,
            )
        except (HierarchyViolation, InvalidDateComponent) as e:
            row_error(columns[e.component], str(e))
            return None


def parse_rows(rows: Iterable[Sequence], repository: ResourceRepository) -> RowParseResult:
    """Parse Knightlab rows into drafts and row errors.

    Raises:
        SchemaError: The header row is invalid
    """
    return RowParser(repository).parse(rows)
