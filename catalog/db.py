# catalog/db.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL, SQL_ECHO


def build_engine(database_url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
    """
    Creates the SQLAlchemy engine for the given URL.
    An in-memory SQLite database lives only as long as its connection, so it is
    served through one shared connection that every session (and thread) reuses.
    """
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo)


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
