"""
Database configuration and models.
"""

from app.db.database import create_db_engine, create_session_factory
from app.db.models import Base, Calculation, CalculationType

__all__ = ["create_db_engine", "create_session_factory", "Base", "Calculation", "CalculationType"]
