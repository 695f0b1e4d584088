"""
Mappers between pipeline runs and API DTOs.
"""
from typing import Optional

from ..services.upload_pipeline import PipelineRun
from .dto import PipelineStatusDTO, UploadResponseDTO


def _status_fields(run: PipelineRun) -> dict:
    return {
        "upload_id": run.upload_id,
        "filename": run.filename,
        "state": run.state.value,
        "history": [state.value for state in run.history],
        "progress": run.progress,
        "used_fallback": run.used_fallback,
        "error": run.error,
    }


def run_to_status(run: Optional[PipelineRun]) -> PipelineStatusDTO:
    if run is None:
        return PipelineStatusDTO()
    return PipelineStatusDTO(**_status_fields(run))


def run_to_upload_response(run: PipelineRun) -> UploadResponseDTO:
    return UploadResponseDTO(
        **_status_fields(run),
        document=run.document,
        expense=run.expense,
    )
