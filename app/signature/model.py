"""
Signature models — the guestbook entry and its partial / insertion forms.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Signature(BaseModel):
    """
    One guestbook entry.

    ``id`` is the insertion time in milliseconds since the Unix epoch,
    assigned by the store and unique within it.
    """

    id: int
    name: str
    message: str | None = None

    def to_json(self) -> dict[str, object]:
        """Serializable form; an absent message is omitted."""
        return self.model_dump(exclude_none=True)


class NewSignature(BaseModel):
    """Payload for inserting a signature (no id yet)."""

    name: str
    message: str | None = None


class PartialSignature(BaseModel):
    """
    Any subset of Signature's fields.

    Serves as a *matcher* (select records whose fields equal every field
    set here) and as a *patch* (fields set here override a record's).
    Only explicitly set fields take part, so ``PartialSignature()`` is
    the empty matcher and ``PartialSignature(message=None)`` matches
    records without a message. Values are validated strictly: ``"1"``
    is not an id.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    id: int | None = None
    name: str | None = None
    message: str | None = None

    def fields(self) -> dict[str, object]:
        """The explicitly set fields and their values."""
        return {key: getattr(self, key) for key in self.model_fields_set}
