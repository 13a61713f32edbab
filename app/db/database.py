"""
Database engine and session factory for the SQL storage backend.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from app.db.models import Base


def create_db_engine(database_url: str) -> Engine:
    """Create an engine suited to the database behind ``database_url``."""
    # Use NullPool for serverless/Supabase compatibility
    if database_url.startswith("postgresql"):
        return create_engine(database_url, poolclass=NullPool)
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # A single shared connection keeps the in-memory database alive
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # Needed for SQLite
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create tables if needed and return a session factory bound to ``engine``."""
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
