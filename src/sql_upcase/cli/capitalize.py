"""
CLI for keyword capitalization of files or stdin.

Usage:
    # Capitalize stdin, print the result
    echo "select * from foo;" | python -m sql_upcase.cli capitalize

    # Only lines of a region (character offsets)
    python -m sql_upcase.cli capitalize query.sql --start 0 --end 120

    # Rewrite files, keeping some words lowercase
    python -m sql_upcase.cli capitalize --in-place --blacklist name,user *.sql

    # CI check: exit 1 when any file would change
    python -m sql_upcase.cli capitalize --check *.sql
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from sql_upcase.domain.errors import SqlUpcaseError
from sql_upcase.domain.models import Dialect, DocumentMode
from sql_upcase.infrastructure.host.text_document import TextDocument
from sql_upcase.orchestration.session import CapitalizationSession
from sql_upcase.utils.logging import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_ERROR = 2

STDIN_NAME = "<stdin>"


def _split_words(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [word.strip() for word in value.split(",") if word.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sql_upcase.cli capitalize",
        description="Capitalize keywords outside comments and plain strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Files to process (default: read stdin, write stdout)",
    )
    parser.add_argument(
        "--dialect",
        choices=[d.value for d in Dialect],
        default=None,
        help="Dialect of the input (default: SQLUP_DEFAULT_DIALECT)",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in DocumentMode],
        default=DocumentMode.QUERY.value,
        help="How the text is edited natively (default: query)",
    )
    parser.add_argument(
        "--blacklist",
        default=None,
        help="Comma-separated words never capitalized, added to the configured ones",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="First character offset of the region (default: 0)",
    )
    parser.add_argument(
        "--end",
        type=int,
        default=None,
        help="End character offset of the region, exclusive (default: end of text)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite the files instead of printing them",
    )
    output.add_argument(
        "--check",
        action="store_true",
        help="Print nothing; exit 1 if any input would change",
    )
    return parser


def capitalize_text(
    session: CapitalizationSession,
    text: str,
    name: str,
    dialect: Optional[Dialect],
    mode: DocumentMode,
    start: int = 0,
    end: Optional[int] = None,
) -> str:
    """Run the batch processor over ``text`` and return the rewritten text."""
    document = TextDocument(text=text, name=name, mode=mode, dialect=dialect)
    try:
        result = session.capitalize_region(
            document, start, len(text) if end is None else end
        )
    finally:
        session.close(document)
    logger.info(
        "cli.document_capitalized",
        document=name,
        tokens_examined=result.tokens_examined,
        tokens_capitalized=result.tokens_capitalized,
    )
    return document.text


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 success, 1 check failed, 2 configuration or IO error
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.in_place and not args.files:
        print("--in-place needs at least one file", file=sys.stderr)
        return EXIT_ERROR

    try:
        session = CapitalizationSession.from_settings(
            extra_blacklist=_split_words(args.blacklist)
        )
    except (SqlUpcaseError, ValidationError) as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    dialect = Dialect.from_name(args.dialect) if args.dialect else None
    mode = DocumentMode(args.mode)

    if not args.files:
        source = sys.stdin.read()
        result = capitalize_text(
            session, source, STDIN_NAME, dialect, mode, args.start, args.end
        )
        if args.check:
            return EXIT_CHECK_FAILED if result != source else EXIT_OK
        sys.stdout.write(result)
        return EXIT_OK

    exit_code = EXIT_OK
    for name in args.files:
        path = Path(name)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Cannot read {name}: {e}", file=sys.stderr)
            return EXIT_ERROR

        result = capitalize_text(
            session, source, name, dialect, mode, args.start, args.end
        )

        if args.check:
            if result != source:
                print(f"would capitalize {name}", file=sys.stderr)
                exit_code = EXIT_CHECK_FAILED
        elif args.in_place:
            if result != source:
                try:
                    path.write_text(result, encoding="utf-8")
                except OSError as e:
                    print(f"Cannot write {name}: {e}", file=sys.stderr)
                    return EXIT_ERROR
                logger.info("cli.file_rewritten", path=name)
        else:
            sys.stdout.write(result)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
