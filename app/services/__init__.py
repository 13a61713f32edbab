"""
Application services.
"""

from app.services.storage import (
    CalculationRecord,
    CalculationStorage,
    MemoryStorage,
    SQLStorage,
    StorageError,
    create_storage,
    get_storage,
)

__all__ = [
    "CalculationRecord",
    "CalculationStorage",
    "MemoryStorage",
    "SQLStorage",
    "StorageError",
    "create_storage",
    "get_storage",
]
