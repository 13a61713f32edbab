"""
Calculation record storage.

Records are immutable once saved. The application creates one storage
instance at startup (see ``create_storage``) and hands it to request
handlers through the ``get_storage`` dependency.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generator, List, Optional

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings
from app.db.database import create_db_engine, create_session_factory
from app.db.models import Calculation, generate_uuid, utcnow

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage backend fails to read or write a record."""


@dataclass(frozen=True)
class CalculationRecord:
    """A saved calculation as returned by the storage layer."""

    id: str
    type: str
    inputs: Any
    results: Any
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "inputs": self.inputs,
            "results": self.results,
            "created_at": self.created_at,
        }


class CalculationStorage(ABC):
    """Interface shared by all storage backends."""

    @abstractmethod
    def save_calculation(self, calc_type: str, inputs: Any, results: Any) -> CalculationRecord:
        """Store a new record and return it with its generated id and timestamp."""

    @abstractmethod
    def get_calculation(self, calculation_id: str) -> Optional[CalculationRecord]:
        """Return the record with ``calculation_id`` or None."""

    @abstractmethod
    def get_calculations_by_type(self, calc_type: str) -> List[CalculationRecord]:
        """Return all records of ``calc_type`` in insertion order."""

    def close(self) -> None:
        """Release backend resources."""


class MemoryStorage(CalculationStorage):
    """Process-local store backed by a dict. Contents are lost on shutdown."""

    def __init__(self):
        self._calculations: Dict[str, CalculationRecord] = {}

    def save_calculation(self, calc_type: str, inputs: Any, results: Any) -> CalculationRecord:
        record = CalculationRecord(
            id=generate_uuid(),
            type=calc_type,
            inputs=deepcopy(inputs),
            results=deepcopy(results),
            created_at=utcnow(),
        )
        self._calculations[record.id] = record
        return record

    def get_calculation(self, calculation_id: str) -> Optional[CalculationRecord]:
        return self._calculations.get(calculation_id)

    def get_calculations_by_type(self, calc_type: str) -> List[CalculationRecord]:
        return [calc for calc in self._calculations.values() if calc.type == calc_type]

    def close(self) -> None:
        self._calculations.clear()


class SQLStorage(CalculationStorage):
    """Store backed by any SQLAlchemy-compatible database."""

    def __init__(self, database_url: str):
        self._engine = create_db_engine(database_url)
        self._session_factory: sessionmaker = create_session_factory(self._engine)

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(str(e)) from e
        finally:
            db.close()

    @staticmethod
    def _to_record(row: Calculation) -> CalculationRecord:
        # SQLite returns naive datetimes even for timezone-aware columns
        created_at = row.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return CalculationRecord(
            id=row.id,
            type=row.type,
            inputs=row.inputs,
            results=row.results,
            created_at=created_at,
        )

    def save_calculation(self, calc_type: str, inputs: Any, results: Any) -> CalculationRecord:
        row = Calculation(
            id=generate_uuid(),
            type=calc_type,
            inputs=inputs,
            results=results,
            created_at=utcnow(),
        )
        with self._session() as db:
            db.add(row)
            db.flush()
            return self._to_record(row)

    def get_calculation(self, calculation_id: str) -> Optional[CalculationRecord]:
        with self._session() as db:
            row = db.execute(
                select(Calculation).where(Calculation.id == calculation_id)
            ).scalar_one_or_none()
            return self._to_record(row) if row else None

    def get_calculations_by_type(self, calc_type: str) -> List[CalculationRecord]:
        with self._session() as db:
            rows = db.execute(
                select(Calculation)
                .where(Calculation.type == calc_type)
                .order_by(Calculation.seq.asc())
            ).scalars()
            return [self._to_record(row) for row in rows]

    def close(self) -> None:
        self._engine.dispose()


def create_storage(settings: Settings) -> CalculationStorage:
    """Build the storage backend selected by ``settings.storage_backend``."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sql":
        return SQLStorage(settings.database_url)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def get_storage(request: Request) -> CalculationStorage:
    """Dependency returning the storage created at application startup."""
    return request.app.state.storage
