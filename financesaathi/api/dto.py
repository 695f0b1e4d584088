"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from pipeline internals.
"""
from pydantic import BaseModel
from typing import List, Optional

from ..models import ExpenseRecord, UploadedDocument


class PipelineStatusDTO(BaseModel):
    """State of the latest pipeline run."""
    upload_id: Optional[str] = None
    filename: Optional[str] = None
    state: str = "idle"
    history: List[str] = []
    progress: int = 0
    used_fallback: bool = False
    error: Optional[str] = None


class UploadResponseDTO(PipelineStatusDTO):
    """Response DTO for a processed upload."""
    document: UploadedDocument
    expense: ExpenseRecord


class ErrorResponseDTO(BaseModel):
    """Error response DTO."""
    error: str
    status_code: int
    path: Optional[str] = None
    request_id: Optional[str] = None
