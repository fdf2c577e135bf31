"""Per-IP rate limiting for the roast endpoints (slowapi).

The Limiter owns the counter storage (`memory://` unless
RATE_LIMIT_STORAGE_URI points elsewhere, e.g. redis). Counts use a moving
window, so entries expire one window after the request; limiter.reset()
drops everything.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from cv_roaster.config import Settings, load_settings
from cv_roaster.core.logger import logger
from cv_roaster.middleware import request_id_var


def build_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.rate_limit_storage_uri,
        strategy="moving-window",
    )


limiter = build_limiter(load_settings())


def roast_rate_limit() -> str:
    """Resolved per request so the limit follows the current settings."""
    return load_settings().rate_limit


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    settings = load_settings()
    client = get_remote_address(request)
    logger.warning(f"Rate limit exceeded for {client}: {exc.detail}")
    return JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests, please try again later.",
            "retryAfter": f"{settings.rate_limit_window_minutes} minutes",
            "request_id": request_id_var.get("-"),
        },
        headers={"Retry-After": str(exc.limit.limit.get_expiry())},
    )
