"""
Database engine and session factory.

SQLite is used for local development and tests; deployments point
DATABASE_URL at Postgres (psycopg driver).
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv
import logging

from rentmanager.core.config import settings

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

if not DATABASE_URL:
    raise ValueError("[ERROR] DATABASE_URL is not set")


def _connect_args(url: str) -> dict:
    if url.lower().startswith("sqlite"):
        # sessions are handed across FastAPI's threadpool
        return {"check_same_thread": False}
    return {
        "connect_timeout": 10,
        "options": "-c statement_timeout=30000",
    }


engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args(DATABASE_URL),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Request-scoped session; handlers commit or roll back themselves."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def describe_database() -> str:
    """Database URL with the password hidden, for logs"""
    return make_url(DATABASE_URL).render_as_string(hide_password=True)


def test_connection() -> bool:
    """SELECT 1 against the configured database; never raises."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info(f"[OK] Database reachable: {describe_database()}")
        return True
    except Exception as e:
        logger.warning(f"[WARN] Database unreachable ({describe_database()}): {e}")
        return False


def init_db(bind=None) -> bool:
    """Create any missing tables for the rental models."""
    import rentmanager.models  # noqa: F401
    from rentmanager.db.base import Base

    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info(f"[OK] Tables ready: {', '.join(sorted(Base.metadata.tables))}")
        return True
    except Exception as e:
        logger.error(f"[ERROR] Could not create tables: {e}")
        return False


def close_db_connection():
    engine.dispose()
    logger.info("[OK] Database connection pool disposed")
