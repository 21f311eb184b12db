import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from string_analyzer.config import settings
from string_analyzer.db import StringStore
from string_analyzer.errors import StringAnalyzerError
from string_analyzer.logging import init_logging, RequestLoggingMiddleware
from string_analyzer.routes import router

logger = logging.getLogger("string_analyzer")

_MISSING_OR_MALFORMED = {"missing", "json_invalid"}


def _validation_status(request: Request, exc: RequestValidationError) -> int:
    """Missing fields and unreadable JSON are bad requests; wrong types are 422."""
    if request.method == "POST" and request.url.path.endswith("/strings"):
        if any(err.get("type") in _MISSING_OR_MALFORMED for err in exc.errors()):
            return 400
        return 422
    return 400


async def string_analyzer_error_handler(request: Request, exc: StringAnalyzerError):
    logger.warning(
        "%s: %s %s -> %s | %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    status = _validation_status(request, exc)
    logger.warning(
        "ValidationError: %s %s -> %s | errors=%s",
        request.method,
        request.url.path,
        status,
        exc.errors(),
    )
    return JSONResponse(
        status_code=status,
        content={
            "error": "Validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(store: Optional[StringStore] = None) -> FastAPI:
    """Build the application around ``store`` (a fresh one when omitted)."""
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description=(
            "Analyze strings and store their computed properties in memory.\n\n"
            "Features:\n"
            "- Length, palindrome, word count, character frequency and SHA-256 per string\n"
            "- Structured filtering via query parameters\n"
            "- Filtering via simple natural language phrases"
        ),
    )
    app.state.store = store if store is not None else StringStore()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StringAnalyzerError, string_analyzer_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router)
    return app


init_logging()
app = create_app()
