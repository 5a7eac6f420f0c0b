"""
Unified CLI entry point for sql-upcase.

Usage:
    python -m sql_upcase.cli <command> [options]

Available commands:
    capitalize   - Capitalize keywords in files or stdin
    keywords     - List the keywords of a dialect
    dialects     - List supported dialects and their eval prefixes

Examples:
    # Capitalize stdin as PostgreSQL
    echo "select 1;" | python -m sql_upcase.cli capitalize --dialect postgres

    # Rewrite files in place
    python -m sql_upcase.cli capitalize --in-place queries/*.sql

    # Fail when a file is not capitalized (CI)
    python -m sql_upcase.cli capitalize --check queries/*.sql

    # Keywords of the Redis-like command set
    python -m sql_upcase.cli keywords --dialect redis
"""

import argparse
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="sql_upcase.cli",
        description="sql-upcase CLI - context-aware keyword capitalization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  echo "select 1;" | python -m sql_upcase.cli capitalize --dialect postgres
  python -m sql_upcase.cli capitalize --check queries/*.sql
  python -m sql_upcase.cli keywords --dialect redis
  python -m sql_upcase.cli dialects
        """,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    subparsers.add_parser(
        "capitalize",
        help="Capitalize keywords in files or stdin",
        description="Capitalize keywords outside comments and plain strings",
        add_help=False,  # Let the delegated module handle help
    )
    subparsers.add_parser(
        "keywords",
        help="List the keywords of a dialect",
        description="Print the canonical keywords a document would use",
        add_help=False,
    )
    subparsers.add_parser(
        "dialects",
        help="List supported dialects",
        description="Print supported dialects and their eval prefixes",
        add_help=False,
    )

    args, remaining_args = parser.parse_known_args(argv)

    if args.command == "capitalize":
        from sql_upcase.cli.capitalize import main as capitalize_main

        return capitalize_main(remaining_args)

    elif args.command == "keywords":
        from sql_upcase.cli.keywords import main as keywords_main

        return keywords_main(remaining_args)

    elif args.command == "dialects":
        from sql_upcase.cli.dialects import main as dialects_main

        return dialects_main(remaining_args)

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
