"""Error taxonomy for exhibit ingestion.

Schema and source problems abort a whole batch and are raised as exceptions
inside the spreadsheet layer. Row and reference problems are collected as
ErrorRecord entries so that the remaining rows keep flowing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Where an error came from and how far it reaches."""
    SCHEMA = "schema"
    SOURCE = "source"
    ROW = "row"
    REFERENCE = "reference"


@dataclass(frozen=True)
class ErrorRecord:
    """A single problem found while ingesting an exhibit.

    Attributes:
        kind: Error category
        field: Column or slide field the error is about
        message: Human readable description
        row_index: 1-based data row index, None for non-tabular errors
    """
    kind: ErrorKind
    field: str
    message: str
    row_index: int | None = None

    def __str__(self) -> str:
        if self.row_index is None:
            return self.message
        return f"Spreadsheet row #{self.row_index}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "row_index": self.row_index,
            "field": self.field,
            "message": self.message,
        }


class ExhibitIngestionError(Exception):
    """Base class for batch-fatal ingestion errors."""

    kind = ErrorKind.SOURCE

    def __init__(self, message: str, field: str = "spreadsheet"):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(kind=self.kind, field=self.field, message=self.message)


class SourceError(ExhibitIngestionError):
    """The spreadsheet source cannot be read or decoded."""

    kind = ErrorKind.SOURCE


class SchemaError(ExhibitIngestionError):
    """The spreadsheet header row does not match the expected columns."""

    kind = ErrorKind.SCHEMA


class HierarchyViolation(ValueError):
    """A finer date component is set while its parent component is empty.

    Args:
        component: The component that is set ("month", "day" or "time")
        value: Its raw value
        parent: The empty parent component
        label: Which date of the slide is built ("start" or "end")
    """

    def __init__(self, component: str, value: str, parent: str, label: str = "start"):
        self.component = component
        self.value = value
        self.parent = parent
        self.label = label
        super().__init__(f'The {label} {component} "{value}" is set, but the {parent} is empty.')


class InvalidDateComponent(ValueError):
    """A date component is not a number, or a time is not h[h][:mm[:ss]]."""

    def __init__(self, component: str, value: str, label: str = "start"):
        self.component = component
        self.value = value
        self.label = label
        super().__init__(f'The {label} {component} "{value}" is not valid.')
