import asyncio
import time

import pytest

from financesaathi.api.exceptions import FileTooLargeError, MalformedResponseError, UnsupportedFileTypeError
from financesaathi.services.acquisition_service import AcquisitionService
from financesaathi.services.database import JSONAdapter
from financesaathi.services.fallback_generator import FallbackGenerator
from financesaathi.services.field_extractor import FieldExtractor
from financesaathi.services.providers import MockProvider
from financesaathi.services.upload_pipeline import PipelineRun, PipelineState, UploadPipeline
from financesaathi.utils.validators import MAX_UPLOAD_SIZE_BYTES

from .conftest import PNG_BYTES, TODAY

SUCCESS_PATH = ["idle", "validating", "uploading", "acquiring", "extracting", "persisted", "complete"]
FALLBACK_PATH = ["idle", "validating", "uploading", "acquiring", "generating", "persisted", "complete"]


class SlowProvider(MockProvider):
    def acquire(self, file_bytes, media_type):
        time.sleep(0.5)
        return super().acquire(file_bytes, media_type)


def _states(run):
    return [state.value for state in run.history]


def test_successful_upload_extracts_and_persists(pipeline, store):
    progress = []

    run = asyncio.run(pipeline.process_upload("order.png", "image/png", PNG_BYTES, on_progress=progress.append))

    assert _states(run) == SUCCESS_PATH
    assert progress == [0, 20, 40, 60, 80, 100]
    assert run.used_fallback is False
    assert run.expense.vendor == "Swiggy"
    assert run.expense.amount == 450.0
    assert run.expense.category == "Food & Entertainment"
    assert run.expense.date.isoformat() == "2025-03-12"
    assert run.expense.source_upload_id == run.document.id == run.upload_id
    assert run.document.confidence == run.expense.confidence == 92.0
    assert run.document.raw_content is None

    expenses = asyncio.run(store.get_all_expenses())
    documents = asyncio.run(store.get_all_documents())
    assert [e["id"] for e in expenses] == [run.expense.id]
    assert [d["id"] for d in documents] == [run.document.id]


def test_pdf_is_routed_to_pdf_provider(pipeline, image_provider, pdf_provider):
    run = asyncio.run(pipeline.process_upload("bill.pdf", "application/pdf", b"%PDF-1.4"))

    assert pdf_provider.calls == 1
    assert image_provider.calls == 0
    assert run.expense.vendor == "Reliance Digital"
    assert run.expense.category == "General"
    assert run.expense.amount == 124999.0
    assert run.expense.date.isoformat() == "2025-03-02"


def test_acquisition_failure_falls_back_to_synthetic_record(pipeline, image_provider, store):
    image_provider.error = ConnectionError("network unreachable")

    run = asyncio.run(pipeline.process_upload("scan.jpg", "image/jpeg", PNG_BYTES))

    assert _states(run) == FALLBACK_PATH
    assert run.used_fallback is True
    assert run.expense.confidence == 0
    assert run.document.confidence == 0
    assert run.document.extracted_text is None
    assert run.expense.date == TODAY
    assert len(asyncio.run(store.get_all_expenses())) == 1


def test_malformed_response_falls_back(pipeline, image_provider):
    image_provider.error = MalformedResponseError("not json")

    run = asyncio.run(pipeline.process_upload("scan.png", "image/png", PNG_BYTES))

    assert run.used_fallback is True
    assert run.expense.confidence == 0


def test_acquisition_timeout_falls_back(store, rng, today):
    pipeline = UploadPipeline(
        store,
        AcquisitionService(provider=SlowProvider(), pdf_provider=MockProvider(), timeout=0.05),
        extractor=FieldExtractor(rng=rng, today=today),
        fallback_generator=FallbackGenerator(rng=rng, today=today),
    )

    run = asyncio.run(pipeline.process_upload("slow.png", "image/png", PNG_BYTES))

    assert _states(run) == FALLBACK_PATH
    assert run.expense.confidence == 0


def test_oversized_upload_rejected_before_acquisition(pipeline, image_provider, store):
    with pytest.raises(FileTooLargeError):
        asyncio.run(pipeline.process_upload("big.jpg", "image/jpeg", b"\x00" * (6 * 1024 * 1024)))

    run = pipeline.current_run
    assert _states(run) == ["idle", "validating", "failed"]
    assert "5 MB" in run.error
    assert image_provider.calls == 0
    assert asyncio.run(store.get_all_expenses()) == []
    assert asyncio.run(store.get_all_documents()) == []


def test_unsupported_type_rejected(pipeline, store):
    with pytest.raises(UnsupportedFileTypeError):
        asyncio.run(pipeline.process_upload("notes.txt", "text/plain", b"hello"))

    assert pipeline.current_run.state == PipelineState.FAILED
    assert asyncio.run(store.get_all_documents()) == []


def test_upload_at_size_limit_is_accepted(pipeline):
    run = asyncio.run(pipeline.process_upload("edge.png", "image/png", b"\x00" * MAX_UPLOAD_SIZE_BYTES))
    assert run.state == PipelineState.COMPLETE


def test_raw_content_stored_when_enabled(store, image_provider, rng, today):
    pipeline = UploadPipeline(
        store,
        AcquisitionService(provider=image_provider, pdf_provider=MockProvider()),
        extractor=FieldExtractor(rng=rng, today=today),
        store_raw_content=True,
    )

    run = asyncio.run(pipeline.process_upload("order.png", "image/png", PNG_BYTES))

    assert run.document.raw_content.startswith("data:image/png;base64,")
    stored = asyncio.run(store.get_document(run.document.id))
    assert stored["raw_content"] == run.document.raw_content


def test_latest_upload_becomes_current_run(pipeline, store):
    async def upload_both():
        return await asyncio.gather(
            pipeline.process_upload("a.png", "image/png", PNG_BYTES),
            pipeline.process_upload("b.png", "image/png", PNG_BYTES),
        )

    first, second = asyncio.run(upload_both())

    # The earlier run is not cancelled, it just stops being the visible one
    assert pipeline.current_run is second
    assert not pipeline.is_current(first)
    assert first.state == second.state == PipelineState.COMPLETE
    assert len(asyncio.run(store.get_all_expenses())) == 2


def test_illegal_transition_raises():
    run = PipelineRun(upload_id="u1", filename="x.png")
    with pytest.raises(RuntimeError):
        run.transition(PipelineState.COMPLETE)

    run.transition(PipelineState.VALIDATING)
    run.transition(PipelineState.UPLOADING)
    with pytest.raises(RuntimeError):
        run.transition(PipelineState.FAILED)


class UnwritableJSONAdapter(JSONAdapter):
    def _write(self, path, records):
        raise OSError("disk full")


def test_store_failure_fails_run_and_stores_nothing(tmp_path, image_provider, rng, today):
    store = UnwritableJSONAdapter(data_dir=tmp_path)
    asyncio.run(store.initialize())
    pipeline = UploadPipeline(
        store,
        AcquisitionService(provider=image_provider, pdf_provider=MockProvider()),
        extractor=FieldExtractor(rng=rng, today=today),
    )

    with pytest.raises(OSError):
        asyncio.run(pipeline.process_upload("order.png", "image/png", PNG_BYTES))

    run = pipeline.current_run
    assert run.state == PipelineState.FAILED
    assert run.finished
    assert _states(run)[-2:] == ["extracting", "failed"]
    assert "disk full" in run.error
    assert asyncio.run(store.get_all_expenses()) == []
    assert asyncio.run(store.get_all_documents()) == []
