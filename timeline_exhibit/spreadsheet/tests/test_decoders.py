"""Unit tests for spreadsheet decoding."""

import io

import pytest
from odf.opendocument import OpenDocumentSpreadsheet
from odf.style import Style, TableProperties
from odf.table import Table, TableCell, TableRow
from odf.text import P
from openpyxl import Workbook

from timeline_exhibit.errors import SourceError
from timeline_exhibit.spreadsheet.decoders import (
    ODS_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    DelimitedTextDecoder,
    OdsDecoder,
    SpreadsheetDecoderFactory,
    SpreadsheetFormats,
    XlsxDecoder,
    decode_spreadsheet,
    detect_format,
)


def xlsx_bytes(rows, hidden_first=False):
    workbook = Workbook()
    sheet = workbook.active
    if hidden_first:
        sheet.append(["hidden"])
        sheet.sheet_state = "hidden"
        sheet = workbook.create_sheet("Visible")
        workbook.active = 1
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def ods_table(name, rows, stylename=None):
    table = Table(name=name, stylename=stylename) if stylename else Table(name=name)
    for row in rows:
        table_row = TableRow()
        for value in row:
            if value is None:
                cell = TableCell()
            elif isinstance(value, bool):
                cell = TableCell(valuetype="boolean", booleanvalue="true" if value else "false")
                cell.addElement(P(text="TRUE" if value else "FALSE"))
            elif isinstance(value, (int, float)):
                cell = TableCell(valuetype="float", value=value)
                cell.addElement(P(text=str(value)))
            else:
                cell = TableCell(valuetype="string")
                for line in value.split("\n"):
                    cell.addElement(P(text=line))
            table_row.addElement(cell)
        table.addElement(table_row)
    return table


def ods_bytes(tmp_path, rows, hidden_first=False):
    document = OpenDocumentSpreadsheet()
    if hidden_first:
        hidden = Style(name="HiddenTable", family="table")
        hidden.addElement(TableProperties(display="false"))
        document.automaticstyles.addElement(hidden)
        document.spreadsheet.addElement(ods_table("Hidden", [["hidden"]], stylename=hidden))
    document.spreadsheet.addElement(ods_table("Timeline", rows))
    path = tmp_path / "timeline.ods"
    document.save(str(path))
    return path.read_bytes()


class TestDelimitedTextDecoder:
    """Comma and tab separated text."""

    def setup_method(self):
        self.decoder = DelimitedTextDecoder()

    def test_comma_with_quotes(self):
        content = b'Year,Headline\n1900,"Paris, France"\n'
        assert self.decoder.decode(content) == [["Year", "Headline"], ["1900", "Paris, France"]]

    def test_quoted_multiline_cell(self):
        content = b'Year,Text\n1900,"line one\nline two"\n'
        assert self.decoder.decode(content)[1] == ["1900", "line one\nline two"]

    def test_doubled_quote_in_quoted_cell(self):
        content = b'Headline,Text\nA,"He said ""hello"""\n'
        assert self.decoder.decode(content)[1] == ["A", 'He said "hello"']

    def test_backslash_in_unquoted_cell_is_kept(self):
        content = b"Headline,Text\nA,C:\\dir\\file and 50\\% off\n"
        assert self.decoder.decode(content)[1] == ["A", "C:\\dir\\file and 50\\% off"]

    def test_backslash_in_quoted_cell_is_kept(self):
        content = b'Headline,Text\nA,"C:\\dir\\, 50\\% off"\n'
        assert self.decoder.decode(content)[1] == ["A", "C:\\dir\\, 50\\% off"]

    def test_tab_separated(self):
        content = b"Year\tHeadline\n1900\t\"Paris, France\"\n"
        rows = self.decoder.decode(content)
        assert rows[0] == ["Year", "Headline"]
        assert rows[1] == ["1900", '"Paris, France"']

    def test_cells_are_trimmed(self):
        assert self.decoder.decode(b" Year , Month \n") == [["Year", "Month"]]

    def test_byte_order_mark_is_removed(self):
        rows = self.decoder.decode("\ufeffYear,Month\n".encode("utf-8"))
        assert rows[0][0] == "Year"

    def test_invalid_utf8(self):
        with pytest.raises(SourceError):
            self.decoder.decode(b"Year,Headline\n1900,\xff\xfe\n")

    def test_forced_tab(self):
        decoder = SpreadsheetDecoderFactory.get_decoder(SpreadsheetFormats.TAB_SEPARATED)
        assert decoder.decode(b"a,b\n") == [["a,b"]]


class TestXlsxDecoder:
    """Office Open XML workbooks."""

    def test_reads_active_sheet(self):
        content = xlsx_bytes([["Year", "Headline"], [1900, "Exposition"], [5.0, None]])
        rows = XlsxDecoder().decode(content)
        assert rows[0] == ["Year", "Headline"]
        assert rows[1] == ["1900", "Exposition"]
        assert rows[2] == ["5", ""]

    def test_skips_hidden_sheet(self):
        content = xlsx_bytes([["Year"], [1900]], hidden_first=True)
        rows = XlsxDecoder().decode(content)
        assert rows[0] == ["Year"]

    def test_invalid_workbook(self):
        with pytest.raises(SourceError):
            XlsxDecoder().decode(b"not a workbook")


class TestOdsDecoder:
    """OpenDocument spreadsheets."""

    def test_reads_cells(self, tmp_path):
        content = ods_bytes(tmp_path, [
            ["Year", "Headline", "Text"],
            [1900, "Exposition", "line one\nline two"],
            [5.5, None, True],
        ])
        rows = OdsDecoder().decode(content)
        assert rows[0] == ["Year", "Headline", "Text"]
        assert rows[1] == ["1900", "Exposition", "line one\nline two"]
        assert rows[2] == ["5.5", "", "TRUE"]

    def test_trailing_empty_cells_and_rows_are_dropped(self, tmp_path):
        content = ods_bytes(tmp_path, [["Year", None, None], [None, None], [-300, None]])
        assert OdsDecoder().decode(content) == [["Year"], [], ["-300"]]

    def test_skips_hidden_table(self, tmp_path):
        content = ods_bytes(tmp_path, [["Year"], [1900]], hidden_first=True)
        rows = OdsDecoder().decode(content)
        assert rows == [["Year"], ["1900"]]

    def test_invalid_document(self):
        with pytest.raises(SourceError):
            OdsDecoder().decode(b"not a spreadsheet")

    def test_temporary_directory_is_removed(self, tmp_path, monkeypatch):
        scratch = tmp_path / "scratch"
        scratch.mkdir()
        monkeypatch.setattr("tempfile.tempdir", str(scratch))
        with pytest.raises(SourceError):
            OdsDecoder().decode(b"not a spreadsheet")
        assert list(scratch.iterdir()) == []


class TestDetectFormat:
    """Declared and sniffed formats."""

    @pytest.mark.parametrize("media_type,expected", [
        ("text/csv", SpreadsheetFormats.DELIMITED),
        ("application/csv", SpreadsheetFormats.DELIMITED),
        ("text/plain; charset=utf-8", SpreadsheetFormats.DELIMITED),
        ("text/tab-separated-values", SpreadsheetFormats.TAB_SEPARATED),
        (XLSX_MEDIA_TYPE, SpreadsheetFormats.XLSX),
        (ODS_MEDIA_TYPE, SpreadsheetFormats.ODS),
        (None, SpreadsheetFormats.DELIMITED),
    ])
    def test_declared(self, media_type, expected):
        assert detect_format(b"Year,Month\n", media_type) == expected

    def test_sniffed_xlsx(self):
        assert detect_format(xlsx_bytes([["Year"]]), "application/octet-stream") == SpreadsheetFormats.XLSX

    def test_sniffed_ods(self, tmp_path):
        assert detect_format(ods_bytes(tmp_path, [["Year"]]), None) == SpreadsheetFormats.ODS

    def test_unknown_media_type(self):
        with pytest.raises(SourceError):
            detect_format(b"\x89PNG", "image/png")


class TestDecodeSpreadsheet:
    """Entry point."""

    def test_empty_content(self):
        with pytest.raises(SourceError):
            decode_spreadsheet(b"", "text/csv")

    def test_xlsx_without_media_type(self):
        rows = decode_spreadsheet(xlsx_bytes([["Year", "Headline"], [1969, "Moon"]]))
        assert rows[1] == ["1969", "Moon"]

    def test_ods_without_media_type(self, tmp_path):
        rows = decode_spreadsheet(ods_bytes(tmp_path, [["Year", "Headline"], [-300, "Alexandria"]]))
        assert rows[1] == ["-300", "Alexandria"]
