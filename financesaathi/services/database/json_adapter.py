"""
JSON file-based adapter implementing RecordStoreInterface.
Stores both collections as JSON arrays so data persists between restarts,
no database setup needed.
"""
import json
import asyncio
import os
from pathlib import Path
from typing import List, Dict, Optional
from threading import Lock

from .memory_adapter import MemoryAdapter
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class JSONAdapter(MemoryAdapter):
    """
    JSON file-based record store.

    Keeps the collections in memory (inherited from MemoryAdapter) and
    rewrites uploaded_documents.json and expense_records.json after every
    append. Files are written to a temporary path and swapped in, so a crash
    never leaves a half-written file behind.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize JSON adapter.

        Args:
            data_dir: Directory to store JSON files (defaults to data/json_db)
        """
        super().__init__()
        if data_dir is None:
            base_dir = Path(__file__).resolve().parent.parent.parent.parent
            data_dir = base_dir / "data" / "json_db"

        self.data_dir = Path(data_dir)
        self.documents_file = self.data_dir / "uploaded_documents.json"
        self.expenses_file = self.data_dir / "expense_records.json"

        # Lock for thread-safe file operations
        self._lock = Lock()
        # Serialises appends so files are written in append order
        self._append_lock = asyncio.Lock()

    async def initialize(self):
        """Initialize store - load data from JSON files."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._documents = self._load(self.documents_file)
        self._expenses = self._load(self.expenses_file)
        logger.info(
            f"JSON store loaded from {self.data_dir} "
            f"({len(self._documents)} documents, {len(self._expenses)} expenses)"
        )

    async def close(self):
        """Close store - save data to JSON files."""
        async with self._append_lock:
            await self._save_data()

    def _load(self, path: Path) -> Dict[str, Dict]:
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load {path.name}: {e}")
            return {}
        if not isinstance(records, list):
            logger.warning(f"Ignoring {path.name}: expected a JSON array")
            return {}
        return {record["id"]: record for record in records if isinstance(record, dict) and record.get("id")}

    def _write(self, path: Path, records: List[Dict]) -> Path:
        """Write records next to path and return the temporary file."""
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        return tmp_path

    async def _save_data(self, documents: Optional[List[Dict]] = None, expenses: Optional[List[Dict]] = None):
        """Save records to the JSON files (defaults to the in-memory collections)."""
        if documents is None:
            documents = list(self._documents.values())
        if expenses is None:
            expenses = list(self._expenses.values())

        def _save():
            with self._lock:
                # Both files are staged before either is swapped in
                documents_tmp = self._write(self.documents_file, documents)
                expenses_tmp = self._write(self.expenses_file, expenses)
                os.replace(documents_tmp, self.documents_file)
                os.replace(expenses_tmp, self.expenses_file)

        # Run in executor to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _save)

    async def append_upload(self, document: Dict, expense: Dict) -> None:
        # Files are written first; memory only changes once both writes succeeded
        async with self._append_lock:
            self._check_upload(document, expense)
            await self._save_data(
                list(self._documents.values()) + [document],
                list(self._expenses.values()) + [expense],
            )
            self._insert_upload(document, expense)

    async def append_expense(self, expense: Dict) -> None:
        async with self._append_lock:
            self._check_new(self._expenses, expense, "Expense")
            await self._save_data(expenses=list(self._expenses.values()) + [expense])
            self._insert_expense(expense)
