"""
Upload Pipeline - drives one invoice from upload to stored expense.

validate -> upload -> acquire -> extract (or generate fallback) -> persist.
Acquisition failures never reach the caller; they switch the run onto the
fallback path. Validation failures and record store failures are raised;
the latter leave the run in the failed state with nothing stored.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from ..api.exceptions import AcquisitionError, UploadValidationError
from ..core.logging_config import get_logger
from ..models import ExpenseRecord, UploadedDocument
from ..utils.validators import validate_upload
from .acquisition_service import AcquisitionService
from .database import RecordStoreInterface
from .fallback_generator import FallbackGenerator
from .field_extractor import FieldExtractor
from .providers.openai_provider import to_data_uri

logger = get_logger(__name__)

PROGRESS_STEP = 20


class PipelineState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    ACQUIRING = "acquiring"
    EXTRACTING = "extracting"
    GENERATING = "generating"
    PERSISTED = "persisted"
    COMPLETE = "complete"
    FAILED = "failed"


ALLOWED_TRANSITIONS: Dict[PipelineState, Set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.VALIDATING},
    PipelineState.VALIDATING: {PipelineState.UPLOADING, PipelineState.FAILED},
    PipelineState.UPLOADING: {PipelineState.ACQUIRING},
    PipelineState.ACQUIRING: {PipelineState.EXTRACTING, PipelineState.GENERATING},
    PipelineState.EXTRACTING: {PipelineState.PERSISTED, PipelineState.FAILED},
    PipelineState.GENERATING: {PipelineState.PERSISTED, PipelineState.FAILED},
    PipelineState.PERSISTED: {PipelineState.COMPLETE},
    PipelineState.COMPLETE: set(),
    PipelineState.FAILED: set(),
}


@dataclass
class PipelineRun:
    """State of a single upload as it moves through the pipeline."""
    upload_id: str
    filename: str
    state: PipelineState = PipelineState.IDLE
    history: List[PipelineState] = field(default_factory=lambda: [PipelineState.IDLE])
    progress: int = 0
    document: Optional[UploadedDocument] = None
    expense: Optional[ExpenseRecord] = None
    error: Optional[str] = None
    used_fallback: bool = False

    def transition(self, new_state: PipelineState) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal pipeline transition {self.state.value} -> {new_state.value}")
        logger.debug(f"Upload {self.upload_id}: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    @property
    def finished(self) -> bool:
        return self.state in (PipelineState.COMPLETE, PipelineState.FAILED)


class UploadPipeline:
    """
    Orchestrates uploads against a record store.

    The most recently started run is exposed as current_run. Older runs are
    not cancelled when a new one starts; they finish and persist normally
    but stop being the visible one.
    """

    def __init__(
        self,
        store: RecordStoreInterface,
        acquisition_service: AcquisitionService,
        extractor: Optional[FieldExtractor] = None,
        fallback_generator: Optional[FallbackGenerator] = None,
        store_raw_content: bool = False
    ):
        self.store = store
        self.acquisition_service = acquisition_service
        self.extractor = extractor or FieldExtractor()
        self.fallback_generator = fallback_generator or FallbackGenerator()
        self.store_raw_content = store_raw_content
        self.current_run: Optional[PipelineRun] = None

    def is_current(self, run: PipelineRun) -> bool:
        return self.current_run is run

    def _report_progress(self, run: PipelineRun, on_progress: Optional[Callable[[int], None]]) -> None:
        for progress in range(0, 101, PROGRESS_STEP):
            run.progress = progress
            if on_progress is not None:
                on_progress(progress)

    async def process_upload(
        self,
        filename: str,
        content_type: Optional[str],
        file_bytes: bytes,
        on_progress: Optional[Callable[[int], None]] = None
    ) -> PipelineRun:
        """
        Run one upload through the whole pipeline.

        Args:
            filename: Original filename (also scanned for vendor keywords)
            content_type: Declared media type
            file_bytes: File content
            on_progress: Optional callback receiving upload progress 0-100

        Returns:
            The finished PipelineRun with its document and expense

        Raises:
            UploadValidationError: If the file type or size is rejected
        """
        run = PipelineRun(upload_id=str(uuid.uuid4()), filename=filename)
        self.current_run = run

        run.transition(PipelineState.VALIDATING)
        try:
            media_type = validate_upload(filename, content_type, len(file_bytes))
        except UploadValidationError as e:
            run.error = str(e)
            run.transition(PipelineState.FAILED)
            logger.warning(f"Rejected upload '{filename}': {e}")
            raise

        run.transition(PipelineState.UPLOADING)
        self._report_progress(run, on_progress)

        run.transition(PipelineState.ACQUIRING)
        try:
            result = await self.acquisition_service.acquire(file_bytes, media_type)
        except AcquisitionError as e:
            run.transition(PipelineState.GENERATING)
            logger.warning(f"Text acquisition failed for '{filename}', using fallback data: {e}")
            run.used_fallback = True
            candidate = self.fallback_generator.generate()
            extracted_text = None
        else:
            run.transition(PipelineState.EXTRACTING)
            candidate = self.extractor.extract(result.text, result.confidence, filename)
            extracted_text = result.text

        document = UploadedDocument(
            id=run.upload_id,
            filename=filename,
            content_type=media_type,
            size_bytes=len(file_bytes),
            upload_timestamp=datetime.now().isoformat(),
            raw_content=to_data_uri(file_bytes, media_type) if self.store_raw_content else None,
            extracted_text=extracted_text,
            confidence=candidate.confidence,
        )
        expense = ExpenseRecord(
            **candidate.model_dump(),
            id=str(uuid.uuid4()),
            source_upload_id=run.upload_id,
        )

        try:
            await self.store.append_upload(document.model_dump(mode="json"), expense.model_dump(mode="json"))
        except Exception as e:
            run.error = f"Could not store upload: {e}"
            run.transition(PipelineState.FAILED)
            logger.error(f"Failed to persist upload '{filename}': {e}")
            raise
        run.transition(PipelineState.PERSISTED)

        run.document = document
        run.expense = expense
        run.transition(PipelineState.COMPLETE)
        logger.info(
            f"Processed '{filename}' -> {expense.vendor} {expense.amount:.2f} "
            f"({expense.category}, confidence {expense.confidence})"
        )
        return run
