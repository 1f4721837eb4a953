from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import text
import time
import logging

from films.config import DATABASE_URL, DB_ECHO, DB_CONNECT_RETRIES, DB_RETRY_DELAY

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    if url.startswith("postgresql"):
        return {"connect_timeout": 10}
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(DATABASE_URL),
    echo=DB_ECHO
)


def ping():
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def create_tables():
    """The store owns the schema: create missing tables, leave existing ones alone."""
    SQLModel.metadata.create_all(engine)
    logger.info(f"Tables are in place on {engine.dialect.name}")


def wait_for_db(max_retries: int = DB_CONNECT_RETRIES, retry_delay: float = DB_RETRY_DELAY):
    last_error = None
    for attempt in range(1, max_retries + 1):
        try:
            ping()
        except Exception as e:
            last_error = e
            logger.error(f"DB not reachable ({attempt}/{max_retries}): {type(e).__name__}: {e}")
            if attempt < max_retries:
                time.sleep(retry_delay)
            continue
        create_tables()
        return
    raise RuntimeError(f"Failed to connect to DB after {max_retries} attempts") from last_error


def get_session():
    with Session(engine) as session:
        yield session
