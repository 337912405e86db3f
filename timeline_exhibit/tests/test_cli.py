"""Tests for the timeline-exhibit command line."""

import json

import pytest

from timeline_exhibit.__main__ import main
from timeline_exhibit.ingestion_common import logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("EXHIBIT_LOCAL_PATH", "EXHIBIT_START_DATE_PROPERTY", "INGEST_LOG_DIR", "EXHIBIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "resources": [{"id": 42, "properties": {"dcterms:date": ["1969-07-20"]}}],
        "assets": [{"id": 7, "name": "banner.png"}],
    }), encoding="utf-8")
    return path


def write_csv(path, *rows):
    path.write_text("\n".join(",".join(row) for row in rows), encoding="utf-8")


class TestMain:
    """Spreadsheet and JSON sources."""

    def test_spreadsheet(self, tmp_path, header, make_row, catalog, capsys):
        write_csv(
            tmp_path / "timeline.csv",
            header,
            make_row(headline="Moon", media="42"),
            make_row(year="1900", headline="Expo", background="asset/7"),
        )
        code = main([
            str(tmp_path / "timeline.csv"),
            "--catalog", str(catalog),
            "--item-date-property", "dcterms:date",
            "--log-level", "ERROR",
        ])
        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert [e["field"] for e in output["errors"]] == ["Year"]
        assert [s["headline"] for s in output["slides"]] == ["Expo"]
        assert output["slides"][0]["background_asset"] == 7

    def test_spreadsheet_ordering(self, tmp_path, header, make_row, capsys):
        write_csv(
            tmp_path / "timeline.csv",
            header,
            make_row(year="1900", headline="B"),
            make_row(year="-500", headline="A"),
        )
        code = main(["timeline.csv", "--base-dir", str(tmp_path), "--log-level", "ERROR"])
        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert [s["headline"] for s in output["slides"]] == ["A", "B"]
        assert output["slides"][0]["start_date"] == "-500"

    def test_schema_error_exit_status(self, tmp_path, capsys):
        write_csv(tmp_path / "bad.csv", ["Year", "Headline"], ["1900", "A"])
        code = main([str(tmp_path / "bad.csv"), "--log-level", "CRITICAL"])
        output = json.loads(capsys.readouterr().out)
        assert code == 1
        assert output["slides"] == []
        assert output["errors"][0]["kind"] == "schema"

    def test_json_exhibit(self, tmp_path, catalog, capsys):
        exhibit = tmp_path / "exhibit.json"
        exhibit.write_text(json.dumps({
            "start_date_property": "dcterms:date",
            "slides": [
                {"headline": "Moon", "resource": 42},
                {"headline": "Expo", "start_date": "1900"},
            ],
        }), encoding="utf-8")
        code = main([str(exhibit), "--catalog", str(catalog), "--log-level", "ERROR"])
        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert [s["headline"] for s in output["slides"]] == ["Expo", "Moon"]

    def test_invalid_json_exhibit(self, tmp_path, capsys):
        exhibit = tmp_path / "exhibit.json"
        exhibit.write_text(json.dumps({"slides": "not a list"}), encoding="utf-8")
        assert main([str(exhibit), "--log-level", "CRITICAL"]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_catalog(self, tmp_path):
        assert main([str(tmp_path / "t.csv"), "--catalog", str(tmp_path / "none.json"), "--log-level", "CRITICAL"]) == 1
