"""
Documents Router - read access to uploaded invoices.

Example Usage:
    GET /documents - List uploaded documents in upload order
    GET /documents/{doc_id} - Get one document
"""
from typing import List
from fastapi import APIRouter

from .dependencies import get_expense_service
from ..api.exceptions import DocumentNotFoundError, handle_business_exception
from ..models import UploadedDocument

router = APIRouter()


@router.get("/documents", response_model=List[UploadedDocument])
async def get_documents():
    return await get_expense_service().list_documents()


@router.get("/documents/{doc_id}", response_model=UploadedDocument)
async def get_document(doc_id: str):
    """
    Get a single uploaded document by its ID.

    Raises:
        HTTPException: 404 if document not found
    """
    try:
        return await get_expense_service().get_document(doc_id)
    except DocumentNotFoundError as e:
        raise handle_business_exception(e)
