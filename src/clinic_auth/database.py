"""
Database connection and session management.
Provides the SQLAlchemy engine for the credential store, the request-scoped
session dependency, and the declarative base shared by the identity and
role profile tables.
"""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

# Set up logging
logger = logging.getLogger(__name__)

def build_engine(database_url: str, **kwargs) -> Engine:
    """
    Create an engine for the credential store.

    SQLite connections are shared with FastAPI's worker threads and get
    foreign key enforcement switched on, so a profile row can never point at
    a missing identity. Server databases get connection liveness checks.

    Args:
        database_url: SQLAlchemy connection string
        **kwargs: Extra ``create_engine`` arguments (e.g. ``poolclass``)

    Returns:
        Engine: Configured engine
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False}, **kwargs)

        @event.listens_for(engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        engine = create_engine(database_url, pool_pre_ping=True, **kwargs)

    logger.info(f"Credential store engine ready ({engine.dialect.name})")
    return engine

engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()

def get_db():
    """
    Database dependency - Creates and yields a database session.

    Closed after the request, whether or not the handler raised.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
