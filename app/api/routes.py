"""
FastAPI routes for the guestbook.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api import responses
from app.api.schemas import SignatureInput, SignatureUpdate
from app.signature.store import SignatureStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_signature_store(request: Request) -> SignatureStore:
    """The store owned by the running application."""
    return request.app.state.signature_store


def parse_signature_id(raw: str) -> int | None:
    """Path ids are integers; anything else identifies no signature."""
    try:
        return int(raw)
    except ValueError:
        return None


# ── Signatures ─────────────────────────────────────────────────────

@router.get("/signatures")
async def list_signatures(
    store: SignatureStore = Depends(get_signature_store),
) -> dict[str, Any]:
    """List every signature, oldest first."""
    signatures = [s.to_json() for s in store.get_all()]
    return responses.success({"signatures": signatures})


@router.get("/signatures/{signature_id}", response_model=None)
async def get_signature(
    signature_id: str,
    store: SignatureStore = Depends(get_signature_store),
) -> dict[str, Any] | JSONResponse:
    parsed = parse_signature_id(signature_id)
    signature = store.find_by_id(parsed) if parsed is not None else None
    if signature is None:
        return responses.not_found()
    return responses.success({"signature": signature.to_json()})


@router.post("/signatures", status_code=201)
async def create_signature(
    payload: SignatureInput,
    store: SignatureStore = Depends(get_signature_store),
) -> dict[str, Any]:
    """Sign the guestbook."""
    signature = store.insert(payload.to_new_signature())
    logger.info("Signature %d created by %r", signature.id, signature.name)
    return responses.success({"signature": signature.to_json()})


@router.put("/signatures/{signature_id}", response_model=None)
async def update_signature(
    signature_id: str,
    payload: SignatureUpdate,
    store: SignatureStore = Depends(get_signature_store),
) -> dict[str, Any] | JSONResponse:
    """Merge the supplied fields into an existing signature."""
    parsed = parse_signature_id(signature_id)
    signature = (
        store.update_by_id(parsed, payload.to_patch()) if parsed is not None else None
    )
    if signature is None:
        return responses.not_found()
    return responses.success({"signature": signature.to_json()})


@router.delete("/signatures/{signature_id}", response_model=None)
async def delete_signature(
    signature_id: str,
    store: SignatureStore = Depends(get_signature_store),
) -> dict[str, Any] | JSONResponse:
    parsed = parse_signature_id(signature_id)
    if parsed is None or not store.remove_by_id(parsed):
        return responses.not_found()
    logger.info("Signature %d removed", parsed)
    return responses.success()
