import asyncio
import json
import time

import pytest

from financesaathi.services.database import DatabaseFactory, JSONAdapter, MemoryAdapter


def _document(doc_id):
    return {
        "id": doc_id,
        "filename": f"{doc_id}.png",
        "content_type": "image/png",
        "size_bytes": 10,
        "upload_timestamp": "2025-03-15T10:00:00",
        "raw_content": None,
        "extracted_text": "Total: 100",
        "confidence": 88.0,
    }


def _expense(expense_id, source=None):
    return {
        "id": expense_id,
        "vendor": "Uber",
        "amount": 100.0,
        "category": "Travel",
        "date": "2025-03-15",
        "invoice_number": "INV-2025-123",
        "payment_method": "UPI",
        "status": "processed",
        "source_upload_id": source,
        "extracted_text_snippet": "Total: 100",
        "confidence": 88.0,
    }


def test_memory_store_keeps_insertion_order():
    store = MemoryAdapter()

    async def scenario():
        await store.append_upload(_document("d1"), _expense("e1", "d1"))
        await store.append_expense(_expense("e2"))
        await store.append_upload(_document("d2"), _expense("e3", "d2"))
        return await store.get_all_documents(), await store.get_all_expenses()

    documents, expenses = asyncio.run(scenario())

    assert [d["id"] for d in documents] == ["d1", "d2"]
    assert [e["id"] for e in expenses] == ["e1", "e2", "e3"]


def test_duplicate_ids_rejected_without_partial_write():
    store = MemoryAdapter()
    asyncio.run(store.append_upload(_document("d1"), _expense("e1", "d1")))

    with pytest.raises(ValueError):
        asyncio.run(store.append_upload(_document("d2"), _expense("e1", "d2")))

    # The new document must not be stored when its expense is rejected
    assert asyncio.run(store.get_document("d2")) is None
    assert len(asyncio.run(store.get_all_expenses())) == 1


def test_missing_id_rejected():
    with pytest.raises(ValueError):
        asyncio.run(MemoryAdapter().append_expense({"vendor": "Jio"}))


def test_reads_return_copies():
    store = MemoryAdapter()
    asyncio.run(store.append_expense(_expense("e1")))

    record = asyncio.run(store.get_expense("e1"))
    record["amount"] = 0

    assert asyncio.run(store.get_expense("e1"))["amount"] == 100.0


def test_json_store_persists_and_reloads(tmp_path):
    async def write():
        store = JSONAdapter(data_dir=tmp_path)
        await store.initialize()
        await store.append_upload(_document("d1"), _expense("e1", "d1"))
        await store.append_expense(_expense("e2"))

    async def reload():
        store = JSONAdapter(data_dir=tmp_path)
        await store.initialize()
        return await store.get_all_documents(), await store.get_all_expenses()

    asyncio.run(write())
    documents, expenses = asyncio.run(reload())

    assert [d["id"] for d in documents] == ["d1"]
    assert [e["id"] for e in expenses] == ["e1", "e2"]
    with open(tmp_path / "expense_records.json", encoding="utf-8") as f:
        assert [e["id"] for e in json.load(f)] == ["e1", "e2"]


def test_json_store_ignores_corrupt_file(tmp_path):
    (tmp_path / "expense_records.json").write_text("{not json", encoding="utf-8")
    store = JSONAdapter(data_dir=tmp_path)

    asyncio.run(store.initialize())

    assert asyncio.run(store.get_all_expenses()) == []


def test_factory_creates_adapters(tmp_path):
    assert isinstance(DatabaseFactory.create("memory"), MemoryAdapter)
    assert isinstance(DatabaseFactory.create("json", data_dir=str(tmp_path)), JSONAdapter)
    with pytest.raises(ValueError):
        DatabaseFactory.create("postgres")


def test_stats_count_collections():
    store = MemoryAdapter()
    asyncio.run(store.append_upload(_document("d1"), _expense("e1", "d1")))
    assert asyncio.run(store.get_stats()) == {"documents": 1, "expenses": 1}


class FailingWriteAdapter(JSONAdapter):
    def __init__(self, data_dir):
        super().__init__(data_dir=data_dir)
        self.fail = False

    def _write(self, path, records):
        if self.fail and path == self.expenses_file:
            raise OSError("disk full")
        return super()._write(path, records)


def test_json_store_failed_write_leaves_memory_unchanged(tmp_path):
    store = FailingWriteAdapter(tmp_path)

    async def scenario():
        await store.initialize()
        await store.append_upload(_document("d1"), _expense("e1", "d1"))
        store.fail = True
        with pytest.raises(OSError):
            await store.append_upload(_document("d2"), _expense("e2", "d2"))
        with pytest.raises(OSError):
            await store.append_expense(_expense("e3"))
        return await store.get_all_documents(), await store.get_all_expenses()

    documents, expenses = asyncio.run(scenario())

    assert [d["id"] for d in documents] == ["d1"]
    assert [e["id"] for e in expenses] == ["e1"]
    # The documents file was staged but never swapped in
    with open(tmp_path / "uploaded_documents.json", encoding="utf-8") as f:
        assert [d["id"] for d in json.load(f)] == ["d1"]


class SlowWriteAdapter(JSONAdapter):
    """Delays the first file write so later appends overlap with it."""

    def __init__(self, data_dir):
        super().__init__(data_dir=data_dir)
        self.writes = 0

    def _write(self, path, records):
        self.writes += 1
        if self.writes == 1:
            time.sleep(0.2)
        return super()._write(path, records)


def test_json_store_concurrent_appends_all_reach_disk(tmp_path):
    store = SlowWriteAdapter(tmp_path)

    async def scenario():
        await store.initialize()
        await asyncio.gather(
            store.append_upload(_document("d1"), _expense("e1", "d1")),
            store.append_upload(_document("d2"), _expense("e2", "d2")),
            store.append_expense(_expense("e3")),
        )

    asyncio.run(scenario())

    with open(tmp_path / "uploaded_documents.json", encoding="utf-8") as f:
        assert [d["id"] for d in json.load(f)] == ["d1", "d2"]
    with open(tmp_path / "expense_records.json", encoding="utf-8") as f:
        assert [e["id"] for e in json.load(f)] == ["e1", "e2", "e3"]
