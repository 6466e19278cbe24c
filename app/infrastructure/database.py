import logging
import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Base class for declarative ORM models.
Base = declarative_base()


def build_engine(database_url: str, **kwargs) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, **kwargs)

    # Sessions are used from FastAPI's threadpool
    kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(database_url, **kwargs)
    event.listen(engine, "connect", _configure_sqlite)
    return engine


def _configure_sqlite(dbapi_conn, connection_record) -> None:
    """
    SQLite's LIKE ignores ASCII case and its lower() only folds ASCII.
    Phone matching must be raw, and name/medicine matching must fold the same way Python does.
    """
    dbapi_conn.create_function("lower", 1, str.lower, deterministic=True)
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_database(engine: Engine, max_retries: int = 10, wait_seconds: float = 3) -> None:
    """Create tables, retrying while the database is still starting up."""
    # Registers the ORM models on Base.metadata
    from app.infrastructure import orm_models  # noqa: F401

    for attempt in range(max_retries):
        try:
            logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{max_retries})...")
            Base.metadata.create_all(bind=engine)
            logger.info("✅ DB Connected and Tables Created.")
            return
        except OperationalError:
            if attempt + 1 == max_retries:
                logger.error("❌ Could not connect to DB after retries.")
                raise
            logger.warning(f"⚠️ DB not ready yet. Waiting {wait_seconds}s...")
            time.sleep(wait_seconds)
