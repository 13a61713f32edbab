"""
SQLAlchemy ORM models for saved calculations.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON, Integer
from sqlalchemy.orm import declarative_base
import uuid
import enum


class CalculationType(str, enum.Enum):
    """Calculator kinds a saved record can belong to."""
    emi = "emi"
    sip = "sip"
    rent_vs_buy = "rent-vs-buy"
    gst = "gst"
    compound_interest = "compound-interest"
    unit_converter = "unit-converter"


Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class Calculation(Base):
    """A saved calculation: the inputs and results of one calculator run."""

    __tablename__ = "calculations"

    # Insertion order for listing by type
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True, default=generate_uuid)
    type = Column(String(32), nullable=False, index=True)
    inputs = Column(JSON, nullable=False)
    results = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
