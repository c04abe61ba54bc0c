#!/usr/bin/env python
"""Rebuild the search_text column of every catalog product.

Run after bulk catalog imports or after changing which fields feed the
search text. Only rows whose value is stale are written.

Usage:
    python backend/scripts/rebuild_search_text.py

Environment Variables:
    DATABASE_URL: PostgreSQL connection string
"""

import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from sqlalchemy.exc import SQLAlchemyError

from catalog.search_text import refresh_search_text
from database import get_db_session
from observability.logging_config import configure_logging


def main():
    """Recompute search_text and commit."""
    configure_logging(level="INFO", json_format=False)

    try:
        with get_db_session() as session:
            updated = refresh_search_text(session)
    except SQLAlchemyError as e:
        print(f"ERROR: Failed to rebuild search text: {e}")
        sys.exit(1)

    print(f"SUCCESS: search_text rebuilt for {updated} products")


if __name__ == "__main__":
    main()
