"""
CLI listing the keywords a document of a dialect is capitalized with.

Usage:
    python -m sql_upcase.cli keywords --dialect postgres
    python -m sql_upcase.cli keywords --dialect mysql --source addition
    python -m sql_upcase.cli keywords --dialect redis
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from sql_upcase.config.settings import get_settings
from sql_upcase.domain.errors import SqlUpcaseError
from sql_upcase.domain.models import Dialect, DocumentMode
from sql_upcase.infrastructure.host.text_document import TextDocument
from sql_upcase.orchestration.session import CapitalizationSession

# --source value -> mode of the lookup document
SOURCE_MODES = {
    "native": DocumentMode.QUERY,
    "addition": DocumentMode.FOREIGN,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Print canonical keywords, one per line, sorted.

    Returns:
        Exit code (0 for success, 2 for configuration errors)
    """
    parser = argparse.ArgumentParser(
        prog="sql_upcase.cli keywords",
        description="List the canonical keywords of a dialect",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--dialect",
        choices=[d.value for d in Dialect],
        default=None,
        help="Dialect to list (default: SQLUP_DEFAULT_DIALECT)",
    )
    parser.add_argument(
        "--source",
        choices=sorted(SOURCE_MODES),
        default="native",
        help="native: keywords and built-ins of a query document; "
        "addition: reserved words only, as seen from other documents",
    )
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        session = CapitalizationSession.from_settings(settings)
    except (SqlUpcaseError, ValidationError) as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 2

    dialect = Dialect.from_name(args.dialect) if args.dialect else settings.dialect
    lookup = TextDocument(name="<keywords>", mode=SOURCE_MODES[args.source], dialect=dialect)
    keyword_set = session.registry.get_keywords(lookup)
    session.close(lookup)

    for word in sorted(keyword_set.words.values()):
        print(word)
    return 0


if __name__ == "__main__":
    sys.exit(main())
