#!/usr/bin/env python3
"""
Initialize database tables from SQLAlchemy models.

Creates the leagues, teams, games and odds_lines tables on the database
configured by DATABASE_URL. Existing tables are left untouched.

Usage:
    python scripts/init_database.py
"""
import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Create all database tables from models."""
    from app.core.database import DATABASE_URL, init_db
    from app.models import Base

    logger.info(f"Creating tables on {DATABASE_URL.split('@')[-1]}...")
    init_db()
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    main()
