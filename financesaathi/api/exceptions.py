"""
Custom exceptions for API layer.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class UploadValidationError(Exception):
    """Raised when an uploaded file is rejected before processing."""
    pass


class UnsupportedFileTypeError(UploadValidationError):
    """Raised when the declared media type is not PDF, JPEG or PNG."""
    pass


class FileTooLargeError(UploadValidationError):
    """Raised when the upload exceeds the size ceiling."""
    pass


class AcquisitionError(Exception):
    """Raised when text could not be obtained from the acquisition engine."""
    pass


class AcquisitionTimeoutError(AcquisitionError):
    """Raised when the acquisition engine does not answer in time."""
    pass


class MalformedResponseError(AcquisitionError):
    """Raised when the engine answered but the content cannot be parsed."""
    pass


class DocumentNotFoundError(Exception):
    """Raised when an uploaded document is not found."""
    pass


class ExpenseNotFoundError(Exception):
    """Raised when an expense record is not found."""
    pass


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, FileTooLargeError):
        return HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(e))
    elif isinstance(e, UploadValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    elif isinstance(e, DocumentNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, ExpenseNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
