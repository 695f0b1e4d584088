"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .validators import validate_upload, normalize_media_type, MAX_UPLOAD_SIZE_BYTES, ALLOWED_MEDIA_TYPES
from .search_utils import matches_query, matches_category

__all__ = [
    "validate_upload",
    "normalize_media_type",
    "MAX_UPLOAD_SIZE_BYTES",
    "ALLOWED_MEDIA_TYPES",
    "matches_query",
    "matches_category",
]
