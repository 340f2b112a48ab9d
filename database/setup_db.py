# database/setup_db.py

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from backend.config import DATABASE_URL, DATABASE_ECHO


def create_db_engine(url: str, **kwargs):
    engine = create_engine(url, echo=DATABASE_ECHO, **kwargs)

    if engine.dialect.name == "sqlite":
        # customer_id must resolve to an existing customer
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, _):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine)


def get_db():
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create any missing tables."""
    from database.models import Base

    Base.metadata.create_all(bind=bind or engine)
