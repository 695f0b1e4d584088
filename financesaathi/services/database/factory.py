"""
Record Store Factory.
Implements Factory Pattern for plug-and-play storage support.
"""
from pathlib import Path
from typing import Optional

from .base import RecordStoreInterface
from .memory_adapter import MemoryAdapter
from .json_adapter import JSONAdapter
from ...core.config import DATABASE_TYPE, JSON_DB_PATH
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class DatabaseFactory:
    """
    Factory for creating record store adapters.
    Supports JSON (file-based) and Memory (in-memory) backends.
    """

    @staticmethod
    def create(database_type: Optional[str] = None, **kwargs) -> RecordStoreInterface:
        """
        Create a record store adapter instance.

        Args:
            database_type: 'json', 'memory', or None to use DATABASE_TYPE
            **kwargs: Additional arguments for specific adapters (data_dir)

        Examples:
            db = DatabaseFactory.create('json', data_dir=Path('data/json_db'))
            db = DatabaseFactory.create('memory')
        """
        database_type = (database_type or DATABASE_TYPE).lower()

        if database_type == "json":
            return DatabaseFactory._create_json(**kwargs)
        elif database_type == "memory":
            return MemoryAdapter()
        else:
            raise ValueError(
                f"Unsupported database type: {database_type}. "
                f"Supported types: 'json', 'memory'"
            )

    @staticmethod
    def _create_json(**kwargs) -> JSONAdapter:
        data_dir = kwargs.get("data_dir") or JSON_DB_PATH
        if data_dir:
            data_dir = Path(data_dir)
        return JSONAdapter(data_dir=data_dir)

    @staticmethod
    async def create_and_initialize(database_type: Optional[str] = None, **kwargs) -> RecordStoreInterface:
        """Create a record store adapter and initialize it."""
        db = DatabaseFactory.create(database_type, **kwargs)
        await db.initialize()
        logger.info(f"Record store ready: {type(db).__name__}")
        return db
