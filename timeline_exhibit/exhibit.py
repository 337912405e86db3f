"""Exhibit ingestion: from manual slides or a spreadsheet to ordered slides."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

import requests

from timeline_exhibit.chronology import ChronologicalComparator
from timeline_exhibit.collaborators import HtmlSanitizer, ResourceRepository
from timeline_exhibit.config import ExhibitConfig
from timeline_exhibit.errors import ErrorKind, ErrorRecord, ExhibitIngestionError, SourceError
from timeline_exhibit.ingestion_common import log_error, log_info
from timeline_exhibit.normalizer import SlideNormalizer
from timeline_exhibit.slide import Slide, SlideDraft
from timeline_exhibit.spreadsheet import RowParseResult, decode_spreadsheet, parse_rows, read_source

SCALES = ("human", "cosmological")
MARKER_FIELDS = ("heading", "dates", "body")
FULLTEXT_FIELDS = (
    "start_date",
    "start_display_date",
    "end_date",
    "end_display_date",
    "display_date",
    "headline",
    "html",
    "caption",
    "credit",
)


@dataclass(frozen=True)
class ManualSource:
    """Slides entered by hand, as drafts or in the persisted block shape."""
    slides: Sequence[Union[SlideDraft, Mapping[str, Any]]] = ()


@dataclass(frozen=True)
class SpreadsheetSource:
    """A Knightlab spreadsheet given by location (url or local name) or by content."""
    location: str | None = None
    content: bytes | None = None
    media_type: str | None = None


ExhibitSource = Union[ManualSource, SpreadsheetSource]


@dataclass
class IngestionResult:
    """Ordered slides and every error met on the way."""
    slides: list[Slide] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)

    @property
    def has_fatal_error(self) -> bool:
        return any(e.kind in (ErrorKind.SCHEMA, ErrorKind.SOURCE) for e in self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "slides": [slide.to_dict() for slide in self.slides],
            "errors": [error.to_dict() for error in self.errors],
        }


class ExhibitIngestion:
    """Drives reading, parsing, normalizing and ordering of exhibit slides.

    Args:
        repository: Resource and asset lookups
        sanitizer: Purifier for html, caption and credit
        config: Exhibit configuration
        session: requests session for remote spreadsheets
    """

    def __init__(
        self,
        repository: ResourceRepository,
        sanitizer: HtmlSanitizer,
        config: ExhibitConfig | None = None,
        session: requests.Session | None = None,
    ):
        self.repository = repository
        self.config = config or ExhibitConfig()
        self.session = session
        self.normalizer = SlideNormalizer(repository, sanitizer)

    def ingest(self, source: ExhibitSource, item_date_property: str | None = None) -> IngestionResult:
        """Build the ordered slides of a source.

        A spreadsheet that cannot be read, or whose header is wrong, gives no
        slide and exactly one error. Other problems are collected and the
        faulty rows skipped.

        Args:
            source: Manual slides or a spreadsheet
            item_date_property: Property holding the date of media resources;
                defaults to the configured one

        Returns:
            IngestionResult
        """
        errors: list[ErrorRecord] = []
        if isinstance(source, SpreadsheetSource):
            try:
                parsed = self.read_spreadsheet(source)
            except ExhibitIngestionError as e:
                log_error(f"Spreadsheet rejected: {e.message}")
                return IngestionResult(slides=[], errors=[e.to_record()])
            drafts = parsed.drafts
            errors.extend(parsed.errors)
        elif isinstance(source, ManualSource):
            drafts = [
                draft if isinstance(draft, SlideDraft) else SlideDraft.from_mapping(draft)
                for draft in source.slides
            ]
        else:
            raise TypeError(f"Unsupported exhibit source: {type(source).__name__}")

        slides = self.finalize(drafts, errors, item_date_property)
        return IngestionResult(slides=slides, errors=errors)

    def read_spreadsheet(self, source: SpreadsheetSource) -> RowParseResult:
        """Read, decode and parse a spreadsheet.

        Raises:
            SourceError: The spreadsheet cannot be read or decoded
            SchemaError: The header row is invalid
        """
        if source.content is not None:
            if not source.content:
                raise SourceError("The spreadsheet file is empty.")
            content, media_type = source.content, source.media_type
        else:
            read = read_source(source.location or "", self.config, self.session)
            content, media_type = read.content, source.media_type or read.media_type
        rows = decode_spreadsheet(content, media_type)
        return parse_rows(rows, self.repository)

    def finalize(
        self,
        drafts: Sequence[SlideDraft],
        errors: list[ErrorRecord],
        item_date_property: str | None = None,
    ) -> list[Slide]:
        """Normalize drafts, drop empty slides and sort the rest."""
        slides = []
        for draft in drafts:
            slide = self.normalizer.normalize(draft, errors)
            if slide is not None:
                slides.append(slide)
        comparator = ChronologicalComparator(
            self.repository,
            item_date_property or self.config.start_date_property,
        )
        slides = comparator.sort(slides)
        log_info(f"Exhibit: {len(slides)} slides, {len(errors)} errors")
        return slides

    def hydrate_block_data(self, data: Mapping[str, Any]) -> tuple[dict[str, Any], list[ErrorRecord]]:
        """Normalize a whole block payload before it is saved.

        The spreadsheet key is consumed: when it names a readable spreadsheet
        that yields slides, they replace the manual ones. A rejected
        spreadsheet keeps the manual slides and reports its error.

        Returns:
            (data, errors)
        """
        data = dict(data)
        errors: list[ErrorRecord] = []

        data["scale"] = data.get("scale") if data.get("scale") in SCALES else SCALES[0]
        data["eras"] = parse_eras(data.get("eras"))
        data["markers"] = parse_markers(data.get("markers"))

        drafts = [SlideDraft.from_mapping(slide) for slide in data.get("slides") or []]

        spreadsheet = data.pop("spreadsheet", None)
        if spreadsheet and str(spreadsheet).strip():
            try:
                parsed = self.read_spreadsheet(SpreadsheetSource(location=str(spreadsheet)))
            except ExhibitIngestionError as e:
                log_error(f"Spreadsheet rejected: {e.message}")
                errors.append(e.to_record())
            else:
                errors.extend(parsed.errors)
                if parsed.drafts:
                    drafts = parsed.drafts

        slides = self.finalize(drafts, errors, data.get("start_date_property"))
        data["slides"] = [slide.to_dict() for slide in slides]
        return data, errors


def parse_eras(value) -> dict[str, str] | list:
    """Read eras entered as ``key = value`` lines.

    Structured values are kept as they are.
    """
    if not value:
        return {}
    if not isinstance(value, str):
        return value
    eras = {}
    for line in value.splitlines():
        line = line.strip()
        if not line:
            continue
        key, _, label = line.partition("=")
        eras[key.strip()] = label.strip()
    return eras


def parse_markers(value) -> list:
    """Read markers entered as ``heading = dates = body`` lines."""
    if not value:
        return []
    if not isinstance(value, str):
        return value
    markers = []
    for line in value.splitlines():
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split("=", len(MARKER_FIELDS) - 1)]
        parts += [None] * (len(MARKER_FIELDS) - len(parts))
        markers.append({name: part or None for name, part in zip(MARKER_FIELDS, parts)})
    return markers


def fulltext(slides: Sequence[Union[Slide, Mapping[str, Any]]]) -> str:
    """Concatenate the searchable text of slides (dates, headline, texts)."""
    values = []
    for slide in slides:
        data = slide.to_dict() if isinstance(slide, Slide) else slide
        values.extend(str(data[name]) for name in FULLTEXT_FIELDS if data.get(name))
    return " ".join(values)
