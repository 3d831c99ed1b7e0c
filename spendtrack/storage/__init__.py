"""Storage backends for transactions."""

import logging

from spendtrack.config import Settings
from spendtrack.database import make_engine
from spendtrack.storage.base import QueryResult, TransactionQuery, TransactionStorage
from spendtrack.storage.memory import MemoryStorage
from spendtrack.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> TransactionStorage:
    """Build the backing store named by ``settings.storage_backend``."""
    if settings.storage_backend == "sqlite":
        logger.info("Using SQLite storage at %s", settings.database_path)
        return SqlStorage(make_engine(settings.database_url))
    logger.info("Using in-memory storage")
    return MemoryStorage()


__all__ = [
    "MemoryStorage",
    "QueryResult",
    "SqlStorage",
    "TransactionQuery",
    "TransactionStorage",
    "create_storage",
]
