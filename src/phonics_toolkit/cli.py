"""
Command-line entry point.

    phonics-toolkit ingest "Term 1 2025.xlsx" --name "Term 1" --output term1.json
    phonics-toolkit export record.json --output-dir exports/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from phonics_toolkit import __version__
from phonics_toolkit.common.graphemes import display_grapheme_type
from phonics_toolkit.common.logging_utils import configure_logging
from phonics_toolkit.core.errors import ExportError, IngestionError
from phonics_toolkit.core.utils.serialization import (
    deserialize_record,
    load_json,
    save_json,
    serialize_term_set,
)
from phonics_toolkit.export import ExportConfig, export_assessment
from phonics_toolkit.ingest import ingest_term_set

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phonics-toolkit",
        description="Ingest phonics check word lists and export marking sheets",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    ingest = commands.add_parser("ingest", help="Parse a spreadsheet or PDF into a term set")
    ingest.add_argument("file", type=Path, help="Spreadsheet (.xlsx, .xls, .csv) or PDF")
    ingest.add_argument("--name", help="Term set name (defaults to the filename)")
    ingest.add_argument("--output", "-o", type=Path, help="Write the term set as JSON here")

    export = commands.add_parser("export", help="Write a marking sheet for an assessment record")
    export.add_argument("record", type=Path, help="Assessment record JSON")
    export.add_argument("--output-dir", "-d", type=Path, default=Path("."),
                        help="Directory for the workbook (default: current directory)")
    export.add_argument("--template", "-t", type=Path, action="append", default=[],
                        help="Template to try before the packaged one (repeatable)")
    return parser


def run_ingest(args: argparse.Namespace) -> int:
    try:
        term_set = ingest_term_set(args.file, name=args.name)
    except IngestionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        save_json(serialize_term_set(term_set), args.output)
        print(f"Saved {len(term_set)} words as '{term_set.name}' to {args.output}")
        return 0

    print(f"{term_set.name} ({len(term_set)} words)")
    for index, word in enumerate(term_set.words, start=1):
        print(f"{index:>3}. {word.item:<20} {display_grapheme_type(word.item, word.grapheme_type)}")
    return 0


def run_export(args: argparse.Namespace) -> int:
    try:
        record = deserialize_record(load_json(args.record))
    except (OSError, KeyError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Could not load record {args.record}: {e}")
        print(f"Error: {ExportError.USER_MESSAGE}", file=sys.stderr)
        return 1

    config = ExportConfig(template_paths=tuple(args.template))
    try:
        result = export_assessment(record, args.output_dir, config=config)
    except ExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved {result.path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    if args.command == "ingest":
        return run_ingest(args)
    return run_export(args)


if __name__ == "__main__":
    sys.exit(main())
