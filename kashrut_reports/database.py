from typing import Optional
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool

from .config import config

# Module globals, set by init_db()
engine = None
db_session = None

logger = logging.getLogger("kashrut-reports")


def normalize_database_url(database_url: Optional[str]) -> Optional[str]:
    """
    Normalizes the database URL.
    - Postgres URLs get sslmode=require unless it is already present.
    """
    if not database_url:
        return None

    try:
        url = make_url(database_url)
    except Exception:
        # Leave URLs SQLAlchemy can't parse untouched
        return database_url

    if url.drivername.startswith("postgresql") and "sslmode" not in url.query:
        url = url.set(query={**url.query, "sslmode": "require"})

    return url.render_as_string(hide_password=False)


def init_db(database_url: Optional[str] = None):
    global engine, db_session
    database_url = normalize_database_url(database_url or config.DATABASE_URL)
    if not database_url:
        logger.warning("⚠️ DATABASE_URL not configured. Check the environment variables.")
        return None

    masked_url = database_url.split("@")[-1] if "@" in database_url else database_url
    logger.info(f"🔌 Connecting to database: {masked_url}")

    try:
        if database_url.startswith("sqlite"):
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in database_url or database_url == "sqlite://":
                # in-memory SQLite must share one connection across the scoped sessions
                engine_kwargs["poolclass"] = StaticPool
            engine = create_engine(database_url, **engine_kwargs)
        else:
            engine = create_engine(database_url, pool_pre_ping=True)
        db_session = scoped_session(sessionmaker(autocommit=False, autoflush=False, bind=engine))
        logger.info("✅ Database connection initialized")
    except Exception as e:
        logger.error(f"❌ Failed to create database engine: {e}")
        raise

    return db_session


def get_db():
    """Yields the thread's session. The app teardown calls db_session.remove()."""
    if db_session is None:
        init_db()

    if db_session:
        yield db_session()
    else:
        yield None
