"""
JSON response envelopes: ``{"status": ..., "data": {...}}``.

``success`` for handled requests, ``fail`` for client errors (bad input,
unknown identifier), ``error`` for server faults.
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

NOT_FOUND_MESSAGE = "Could not find a signature with that identifier"


def success(data: dict[str, Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "success"}
    if data is not None:
        body["data"] = data
    return body


def fail(data: dict[str, Any], status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "fail", "data": data})


def error(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "data": {"message": message}},
    )


def not_found() -> JSONResponse:
    return fail({"id": NOT_FOUND_MESSAGE}, status_code=404)
