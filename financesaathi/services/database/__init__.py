"""
Record store abstraction layer for plug-and-play storage support.
Supports JSON (file-based) and Memory (in-memory) backends.
"""
from .base import RecordStoreInterface
from .memory_adapter import MemoryAdapter
from .json_adapter import JSONAdapter
from .factory import DatabaseFactory

__all__ = [
    "RecordStoreInterface",
    "MemoryAdapter",
    "JSONAdapter",
    "DatabaseFactory"
]
