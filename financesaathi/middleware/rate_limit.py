"""
Rate Limiting - protects the upload endpoint from abuse.

Acquisition calls a paid remote engine, so uploads are limited per client.
"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from ..core.config import RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE


def get_rate_limit_key(request: Request) -> str:
    """
    Get rate limit key for request.

    Uses the X-API-Key header when present, otherwise the client IP.
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"api_key:{api_key}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    enabled=RATE_LIMIT_ENABLED
)

rate_limit_per_minute = limiter.limit(f"{RATE_LIMIT_PER_MINUTE}/minute")
