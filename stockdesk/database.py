# stockdesk/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from stockdesk.config import settings


def _normalize_url(url: str) -> str:
    # Hosted Postgres hands out postgres://, SQLAlchemy only knows postgresql://
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


DATABASE_URL = _normalize_url(settings.DATABASE_URL)

# Sessions are used from the threadpool, not the thread that opened the connection
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """Create every table the models declare. Existing tables are left alone."""
    import stockdesk.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
