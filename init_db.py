#!/usr/bin/env python3
# init_db.py
"""
Database initialization script.

Creates every table and seeds the stock catalog and price snapshot when
the catalog is empty. Safe to run repeatedly.

    python init_db.py
"""
import logging
import sys
from pathlib import Path

# Make 'finsight' importable when run from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

from finsight.database import SessionLocal, engine
from finsight.dependencies import get_price_update_service
from finsight.models import Base
from finsight.utils import setup_logging

logger = logging.getLogger(__name__)


def init_db() -> int:
    """Create all tables, then seed the catalog. Returns the number of stocks seeded."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seeded = get_price_update_service().seed_stocks(db)
    finally:
        db.close()

    logger.info(f"Database ready ({seeded} stocks seeded)")
    return seeded


if __name__ == "__main__":
    setup_logging()
    init_db()
