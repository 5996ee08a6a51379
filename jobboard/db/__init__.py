"""
Database module - the in-memory storage engine and its FastAPI dependency.
"""
from jobboard.db.memory import MemoryStorage, get_storage

__all__ = [
    "MemoryStorage",
    "get_storage",
]
