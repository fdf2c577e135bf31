"""CV Roaster API — roasts uploaded CVs and LinkedIn profiles with an LLM.

Run: uvicorn cv_roaster.main:app --reload --port 3001
 or: python -m cv_roaster
Docs: http://localhost:3001/docs
"""

import traceback
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from slowapi.errors import RateLimitExceeded

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from cv_roaster.config import load_settings  # noqa: E402
from cv_roaster.core.constants import (  # noqa: E402
    MAX_UPLOAD_SIZE,
    MULTIPART_OVERHEAD_ALLOWANCE,
    SERVICE_VERSION,
)
from cv_roaster.core.errors import NotFoundError, RoastError, TooLargeError  # noqa: E402
from cv_roaster.core.logger import logger  # noqa: E402
from cv_roaster.core.rate_limit import limiter, rate_limit_exceeded_handler  # noqa: E402
from cv_roaster.middleware import (  # noqa: E402
    RequestIdMiddleware,
    UploadSizeLimitMiddleware,
    request_id_var,
)
from cv_roaster.routes import health, roast  # noqa: E402

settings = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    provider_key = settings.openai_api_key if settings.llm_provider.lower() == "openai" else settings.anthropic_api_key
    logger.info(f"CV Roaster API starting (environment={settings.environment})")
    logger.info(f"LLM provider: {settings.llm_provider}, API key configured: {bool(provider_key)}")
    yield


app = FastAPI(
    title="CV Roaster API",
    version=SERVICE_VERSION,
    description="Roasts CVs and LinkedIn profiles with humorous, actionable LLM feedback.",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Middleware order (outermost first): request ID → CORS → upload size guard
app.add_middleware(
    UploadSizeLimitMiddleware,
    max_body=MAX_UPLOAD_SIZE + MULTIPART_OVERHEAD_ALLOWANCE,
    path_prefix="/api/roast/cv",
    message=TooLargeError.message,
)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestIdMiddleware)


# ── Global exception handlers ────────────────────────────────────────


def _error_response(status_code: int, message: str, exc: BaseException | None = None) -> JSONResponse:
    """`{error, request_id, details?}` — details (traceback) outside production only."""
    content = {"error": message, "request_id": request_id_var.get("-")}
    if exc is not None and not load_settings().is_production:
        content["details"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RoastError)
async def roast_error_handler(request: Request, exc: RoastError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, exc.message, exc)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    if exc.status_code == 404:
        message = NotFoundError.message
    elif exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}")
    return _error_response(exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return _error_response(400, "Invalid request body")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = request_id_var.get("-")
    logger.error(f"Unhandled exception [{rid}]: {exc}\n{traceback.format_exc()}")
    return _error_response(500, "Internal server error", exc)


app.include_router(health.router)
app.include_router(roast.router)


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
