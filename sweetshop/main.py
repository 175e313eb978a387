"""FastAPI application entry point."""

import logging
import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sweetshop.api import auth, sweets
from sweetshop.config import get_settings
from sweetshop.database import init_db
from sweetshop.exceptions import InternalError, SweetShopError, ValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    logger.info(f"Sweet Shop API started ({settings.environment})")
    yield


app = FastAPI(
    title="Sweet Shop API",
    description="Sweet shop inventory with role-gated management and token auth",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
    )
    return response


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
    **extra,
) -> JSONResponse:
    """Build the common error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, **extra}},
        headers=headers,
    )


@app.exception_handler(SweetShopError)
async def handle_sweetshop_error(request: Request, exc: SweetShopError):
    if isinstance(exc, ValidationError):
        return error_response(exc.status_code, exc.message, details=exc.details)
    return error_response(exc.status_code, exc.message, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    error = ValidationError(details=exc.errors())
    return error_response(
        error.status_code,
        error.message,
        details=[
            {"loc": list(e.get("loc", [])), "msg": e.get("msg"), "type": e.get("type")}
            for e in error.details
        ],
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = InternalError()
    if request.app.state.settings.is_development:
        stack = "".join(traceback.format_exception(exc))
        return error_response(error.status_code, error.message, stack=stack)
    return error_response(error.status_code, error.message)


# Register routers
app.include_router(auth.router)
app.include_router(sweets.router)


@app.get("/health")
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "OK", "message": "Sweet Shop API is running"}
