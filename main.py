"""
Guestbook — Signature API
=========================

FastAPI entry point.
Start with:  uvicorn main:app --reload
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import responses
from app.api.routes import router
from app.core.config import Settings, get_settings
from app.core.exceptions import ValidationError
from app.signature.store import SignatureStore

logger = logging.getLogger(__name__)

FIELD_MESSAGES = {
    "name": "A string value for name is required",
    "message": "message must be a string when given",
    "body": "A JSON object body is required",
}


def validation_error_from(
    errors: list[dict[str, Any]], body_field: str = "body"
) -> ValidationError:
    """
    Collapse FastAPI's body errors into one message per field.

    Errors about the body as a whole (missing, not an object, not JSON)
    are reported against *body_field*.
    """
    fields: dict[str, str] = {}
    for err in errors:
        loc = err.get("loc", ())
        field = loc[1] if len(loc) > 1 and isinstance(loc[1], str) else body_field
        fields.setdefault(field, FIELD_MESSAGES.get(field, f"Invalid value for {field}"))
    return ValidationError(fields)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # creating a signature without a usable body means no name was given
    body_field = "name" if request.method == "POST" else "body"
    error = validation_error_from(exc.errors(), body_field)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, error)
    return responses.fail(error.fields, status_code=400)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return responses.error("Something went wrong on our side")


def create_app(
    store: SignatureStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API around *store* (a fresh, empty one by default)."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        description="A guestbook: sign it, read it, amend or remove a signature.",
        version=settings.app_version,
    )
    app.state.signature_store = store if store is not None else SignatureStore()

    # CORS — allow a browser front-end to connect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)

    app.include_router(router)

    @app.get("/")
    async def root():
        return {
            "name": settings.app_title,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
        }

    return app


# ── Logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── App ────────────────────────────────────────────────────────────
app = create_app()
