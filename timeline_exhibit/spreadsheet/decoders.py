"""Decoding spreadsheet bytes into rows of string cells."""

from __future__ import annotations

import csv
import io
import tempfile
import zipfile
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from enum import Enum, auto
from pathlib import Path
from xml.sax import SAXException

from odf import teletype
from odf.config import ConfigItem
from odf.namespaces import CONFIGNS, OFFICENS, STYLENS, TABLENS
from odf.opendocument import load as load_opendocument
from odf.style import Style, TableProperties
from odf.table import Table, TableRow
from odf.text import P
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from timeline_exhibit.errors import SourceError
from timeline_exhibit.ingestion_common import log_info

ODS_MEDIA_TYPE = "application/vnd.oasis.opendocument.spreadsheet"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TSV_MEDIA_TYPE = "text/tab-separated-values"
_ZIP_MAGIC = b"PK\x03\x04"


class SpreadsheetFormats(Enum):
    """Enumeration of supported spreadsheet formats."""
    DELIMITED = auto()
    TAB_SEPARATED = auto()
    XLSX = auto()
    ODS = auto()


MEDIA_TYPES = {
    "application/csv": SpreadsheetFormats.DELIMITED,
    "text/csv": SpreadsheetFormats.DELIMITED,
    "text/plain": SpreadsheetFormats.DELIMITED,
    TSV_MEDIA_TYPE: SpreadsheetFormats.TAB_SEPARATED,
    XLSX_MEDIA_TYPE: SpreadsheetFormats.XLSX,
    ODS_MEDIA_TYPE: SpreadsheetFormats.ODS,
}


class SpreadsheetDecoder(ABC):
    """Interface for spreadsheet decoders."""

    @abstractmethod
    def decode(self, content: bytes) -> list[list[str]]:
        """Decode raw bytes into rows of trimmed string cells.

        Raises:
            SourceError: The content cannot be decoded
        """
        pass


class DelimitedTextDecoder(SpreadsheetDecoder):
    """Comma or tab separated text.

    The separator is a tab as soon as the text contains one. Quotes are only
    honored for comma separated text, where a quote inside a quoted cell is
    doubled. Backslashes are plain characters.
    """

    def __init__(self, force_tab: bool = False):
        self.force_tab = force_tab

    def decode(self, content: bytes) -> list[list[str]]:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SourceError("The spreadsheet file is not a valid UTF-8 text file.") from e

        if self.force_tab or "\t" in text:
            reader = csv.reader(io.StringIO(text), delimiter="\t", quoting=csv.QUOTE_NONE)
        else:
            reader = csv.reader(io.StringIO(text), delimiter=",", quotechar='"', doublequote=True)

        try:
            return [[cell.strip() for cell in row] for row in reader]
        except csv.Error as e:
            raise SourceError(f"The spreadsheet file cannot be parsed: {e}") from e


class XlsxDecoder(SpreadsheetDecoder):
    """Office Open XML workbook, first active and visible sheet."""

    def decode(self, content: bytes) -> list[list[str]]:
        # The temporary directory is removed on every exit path.
        with tempfile.TemporaryDirectory(prefix="spreadsheet") as tmpdir:
            path = Path(tmpdir) / "spreadsheet.xlsx"
            path.write_bytes(content)
            try:
                workbook = load_workbook(path, read_only=True, data_only=True)
            except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
                raise SourceError(f"The spreadsheet file cannot be opened: {e}") from e
            try:
                sheet = self._select_sheet(workbook)
                return [
                    [self._cell_text(value) for value in row]
                    for row in sheet.iter_rows(values_only=True)
                ]
            finally:
                workbook.close()

    @staticmethod
    def _select_sheet(workbook):
        active = workbook.active
        if active is not None and getattr(active, "sheet_state", "visible") == "visible":
            return active
        for sheet in workbook.worksheets:
            if getattr(sheet, "sheet_state", "visible") == "visible":
                return sheet
        return active or workbook.worksheets[0]

    @staticmethod
    def _cell_text(value) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        return str(value).strip()


_CELL = (TABLENS, "table-cell")
_COVERED_CELL = (TABLENS, "covered-table-cell")
_NUMERIC_TYPES = ("float", "percentage", "currency")


class OdsDecoder(SpreadsheetDecoder):
    """OpenDocument spreadsheet, first active and visible table.

    Repeated rows and columns are expanded, except trailing empty ones, which
    office suites repeat up to the sheet limits.
    """

    def decode(self, content: bytes) -> list[list[str]]:
        # The temporary directory is removed on every exit path.
        with tempfile.TemporaryDirectory(prefix="spreadsheet") as tmpdir:
            path = Path(tmpdir) / "spreadsheet.ods"
            path.write_bytes(content)
            try:
                document = load_opendocument(str(path))
                table = self._select_table(document)
                return self._table_rows(table)
            except (zipfile.BadZipFile, KeyError, ValueError, OSError, SAXException) as e:
                raise SourceError(f"The spreadsheet file cannot be opened: {e}") from e

    @staticmethod
    def _select_table(document):
        tables = document.spreadsheet.getElementsByType(Table)
        if not tables:
            raise SourceError("The spreadsheet file has no sheet.")

        hidden_styles = set()
        for style in document.automaticstyles.getElementsByType(Style):
            for properties in style.getElementsByType(TableProperties):
                if properties.attributes.get((TABLENS, "display")) == "false":
                    hidden_styles.add(style.attributes.get((STYLENS, "name")))

        def is_visible(table) -> bool:
            return table.attributes.get((TABLENS, "style-name")) not in hidden_styles

        active_name = None
        for item in document.settings.getElementsByType(ConfigItem):
            if item.attributes.get((CONFIGNS, "name")) == "ActiveTable":
                active_name = teletype.extractText(item).strip()
                break

        for table in tables:
            if table.attributes.get((TABLENS, "name")) == active_name and is_visible(table):
                return table
        for table in tables:
            if is_visible(table):
                return table
        return tables[0]

    def _table_rows(self, table) -> list[list[str]]:
        rows = []
        pending_empty = 0
        for row in table.getElementsByType(TableRow):
            cells = self._row_cells(row)
            repeat = _repeat(row, "number-rows-repeated")
            if not cells:
                pending_empty += repeat
                continue
            rows.extend([] for _ in range(pending_empty))
            pending_empty = 0
            rows.extend(list(cells) for _ in range(repeat))
        return rows

    def _row_cells(self, row) -> list[str]:
        cells = []
        pending_empty = 0
        for node in row.childNodes:
            qname = getattr(node, "qname", None)
            if qname not in (_CELL, _COVERED_CELL):
                continue
            text = self._cell_text(node) if qname == _CELL else ""
            repeat = _repeat(node, "number-columns-repeated")
            if not text:
                pending_empty += repeat
                continue
            cells.extend([""] * pending_empty)
            pending_empty = 0
            cells.extend([text] * repeat)
        return cells

    @staticmethod
    def _cell_text(cell) -> str:
        attributes = cell.attributes
        value_type = attributes.get((OFFICENS, "value-type"))
        if value_type in _NUMERIC_TYPES and (OFFICENS, "value") in attributes:
            number = float(attributes[(OFFICENS, "value")])
            return str(int(number)) if number.is_integer() else str(number)
        if value_type == "date" and (OFFICENS, "date-value") in attributes:
            return attributes[(OFFICENS, "date-value")].strip()
        if value_type == "boolean" and (OFFICENS, "boolean-value") in attributes:
            return "TRUE" if attributes[(OFFICENS, "boolean-value")] == "true" else "FALSE"
        return "\n".join(teletype.extractText(p) for p in cell.getElementsByType(P)).strip()


def _repeat(element, name: str) -> int:
    return max(1, int(element.attributes.get((TABLENS, name), 1)))


class SpreadsheetDecoderFactory:
    """Factory for creating SpreadsheetDecoder instances."""

    @staticmethod
    def get_decoder(spreadsheet_format: SpreadsheetFormats) -> SpreadsheetDecoder:
        if spreadsheet_format == SpreadsheetFormats.DELIMITED:
            return DelimitedTextDecoder()
        elif spreadsheet_format == SpreadsheetFormats.TAB_SEPARATED:
            return DelimitedTextDecoder(force_tab=True)
        elif spreadsheet_format == SpreadsheetFormats.XLSX:
            return XlsxDecoder()
        elif spreadsheet_format == SpreadsheetFormats.ODS:
            return OdsDecoder()
        else:
            raise ValueError(f"Unknown spreadsheet format: {spreadsheet_format}")


def _sniff_zip(content: bytes) -> SpreadsheetFormats:
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            names = set(archive.namelist())
            mimetype = archive.read("mimetype").decode("ascii", "ignore") if "mimetype" in names else ""
    except zipfile.BadZipFile as e:
        raise SourceError("The spreadsheet file is an invalid archive.") from e

    if "xl/workbook.xml" in names:
        return SpreadsheetFormats.XLSX
    if mimetype.strip() == ODS_MEDIA_TYPE:
        return SpreadsheetFormats.ODS
    raise SourceError("The spreadsheet archive format is not supported.")


def detect_format(content: bytes, media_type: str | None) -> SpreadsheetFormats:
    """Choose the decoder for some content.

    Zip archives are identified by their content, whatever the declared media
    type. Other content follows the declared media type, and is read as
    delimited text when none was declared.

    Raises:
        SourceError: The format is unsupported
    """
    if content.startswith(_ZIP_MAGIC):
        return _sniff_zip(content)

    media_type = (media_type or "").split(";", 1)[0].strip().lower()
    if not media_type or media_type == "application/octet-stream":
        return SpreadsheetFormats.DELIMITED
    if media_type not in MEDIA_TYPES:
        raise SourceError(f'The media type "{media_type}" is not supported for spreadsheets.')
    return MEDIA_TYPES[media_type]


def decode_spreadsheet(content: bytes, media_type: str | None = None) -> list[list[str]]:
    """Decode spreadsheet bytes into rows of string cells.

    Raises:
        SourceError: Empty content, unsupported format or decoding failure
    """
    if not content:
        raise SourceError("The spreadsheet file is empty.")
    spreadsheet_format = detect_format(content, media_type)
    log_info(f"Decoding spreadsheet as {spreadsheet_format.name.lower()}")
    return SpreadsheetDecoderFactory.get_decoder(spreadsheet_format).decode(content)
