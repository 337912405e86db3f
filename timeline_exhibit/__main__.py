"""Command line entry point.

Examples:
    timeline-exhibit timeline.csv --catalog catalog.json
    timeline-exhibit https://example.org/timeline.xlsx --item-date-property dcterms:date
    timeline-exhibit exhibit.json --base-dir uploads/
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from timeline_exhibit.config import load_exhibit_config
from timeline_exhibit.errors import ErrorKind
from timeline_exhibit.exhibit import ExhibitIngestion, SpreadsheetSource
from timeline_exhibit.ingestion_common import configure_logging, log_error
from timeline_exhibit.memory_repository import InMemoryRepository
from timeline_exhibit.sanitizer import BeautifulSoupSanitizer
from timeline_exhibit.schema import validate_exhibit_schema
from timeline_exhibit.spreadsheet.sources import is_url


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeline-exhibit",
        description="Ingest a Knightlab spreadsheet or a JSON exhibit and print the ordered slides",
    )
    parser.add_argument(
        "source",
        help="Spreadsheet url or path, or a .json exhibit file",
    )
    parser.add_argument(
        "--media-type",
        help="Media type of the spreadsheet when it cannot be detected",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="JSON catalog of resources and assets used to resolve references",
    )
    parser.add_argument(
        "--item-date-property",
        help="Property holding the date of media resources (e.g. dcterms:date)",
    )
    parser.add_argument(
        "--identifier-property",
        help="Property used to resolve free identifiers (default dcterms:identifier)",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        help="Directory local spreadsheet names are resolved in",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_exhibit_config()
    if args.base_dir:
        config = replace(config, local_path=args.base_dir)
    if args.identifier_property:
        config = replace(config, identifier_property=args.identifier_property)
    if args.item_date_property:
        config = replace(config, start_date_property=args.item_date_property)
    if args.log_level:
        config = replace(config, log_level=args.log_level)

    configure_logging(config.log_level)

    try:
        if args.catalog:
            repository = InMemoryRepository.from_json_file(args.catalog, config.identifier_property)
        else:
            repository = InMemoryRepository(identifier_property=config.identifier_property)
    except (OSError, ValueError, KeyError) as e:
        log_error(f"Cannot load catalog {args.catalog}: {e}")
        return 1

    source = args.source
    if source.lower().endswith(".json") and not is_url(source):
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log_error(f"Cannot load exhibit {source}: {e}")
            return 1

        is_valid, schema_errors = validate_exhibit_schema(data)
        if not is_valid:
            for message in schema_errors:
                log_error(f"Invalid exhibit {source}: {message}")
            return 1

        ingestion = ExhibitIngestion(repository, BeautifulSoupSanitizer(), config)
        data, errors = ingestion.hydrate_block_data(data)
        output = {"slides": data["slides"], "errors": [error.to_dict() for error in errors]}
        fatal = any(error.kind in (ErrorKind.SCHEMA, ErrorKind.SOURCE) for error in errors)
    else:
        if not is_url(source) and config.local_path is None:
            path = Path(source)
            config = replace(config, local_path=path.parent.resolve())
            source = path.name
        ingestion = ExhibitIngestion(repository, BeautifulSoupSanitizer(), config)
        result = ingestion.ingest(SpreadsheetSource(location=source, media_type=args.media_type))
        output = result.to_dict()
        fatal = result.has_fatal_error

    json.dump(output, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 1 if fatal else 0


if __name__ == "__main__":
    sys.exit(main())
