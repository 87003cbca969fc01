import logging

from kashrut_reports.models_db import Base

logger = logging.getLogger("migration")


def run_migrations(engine):
    """Creates any missing tables. Existing tables are left as they are."""
    if engine is None:
        logger.error("❌ No database engine; skipping migrations.")
        return
    logger.info("🔄 Checking database schema...")
    Base.metadata.create_all(bind=engine)
    logger.info("✅ Schema up to date")
