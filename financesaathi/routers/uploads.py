"""
Upload Router - Handles invoice uploads.

Architecture:
- Router handles HTTP request/response only
- UploadPipeline handles validation, acquisition, extraction and persistence

Example Usage:
    POST /upload - Upload one invoice (PDF, JPEG or PNG, at most 5 MB)
    GET /upload/status - State of the most recent upload
"""
from fastapi import APIRouter, File, Request, UploadFile

from .dependencies import get_upload_pipeline
from ..api.dto import PipelineStatusDTO, UploadResponseDTO
from ..api.exceptions import UploadValidationError, handle_business_exception
from ..api.mappers import run_to_status, run_to_upload_response
from ..middleware.rate_limit import rate_limit_per_minute
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/upload", response_model=UploadResponseDTO)
@rate_limit_per_minute
async def upload_invoice(request: Request, file: UploadFile = File(...)):
    """
    Upload a single invoice and turn it into an expense record.

    The upload always yields exactly one expense unless validation fails:
    if text acquisition fails, a fallback record with confidence 0 is stored.

    Status Codes:
        200: Processed (check used_fallback / expense.confidence)
        400: Unsupported file type
        413: File larger than 5 MB
        429: Rate limit exceeded
    """
    pipeline = get_upload_pipeline()
    content = await file.read()
    filename = file.filename or "upload"

    logger.info(f"Received upload '{filename}' ({len(content)} bytes, {file.content_type})")
    try:
        run = await pipeline.process_upload(filename, file.content_type, content)
    except UploadValidationError as e:
        raise handle_business_exception(e)

    return run_to_upload_response(run)


@router.get("/upload/status", response_model=PipelineStatusDTO)
async def get_upload_status():
    """State of the most recently started upload ('idle' before the first one)."""
    return run_to_status(get_upload_pipeline().current_run)
