"""
CLI listing the supported dialects.

Usage:
    python -m sql_upcase.cli dialects
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from sql_upcase.config.settings import get_settings
from sql_upcase.domain.errors import KeywordTableError
from sql_upcase.domain.models import Dialect
from sql_upcase.infrastructure.keywords.eval_keywords import EvalKeywordTable
from sql_upcase.infrastructure.keywords.tables import load_keyword_tables


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print ``<dialect>\\t<eval prefixes>`` for every dialect."""
    parser = argparse.ArgumentParser(
        prog="sql_upcase.cli dialects",
        description="List supported dialects and their eval prefixes",
    )
    parser.add_argument(
        "--tables",
        default=None,
        help="Keyword table YAML to read (default: SQLUP_KEYWORD_TABLES_FILE or packaged)",
    )
    args = parser.parse_args(argv)

    try:
        tables = load_keyword_tables(args.tables or get_settings().keyword_tables_file)
    except (KeywordTableError, ValidationError) as e:
        print(f"Failed to load keyword tables: {e}", file=sys.stderr)
        return 2

    eval_table = EvalKeywordTable.from_tables(tables)
    for dialect in Dialect:
        prefixes = ", ".join(eval_table.prefixes_for(dialect)) or "-"
        print(f"{dialect.value}\t{prefixes}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
