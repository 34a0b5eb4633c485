"""
Pydantic schemas for the request bodies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator

from app.signature.model import NewSignature, PartialSignature


class SignatureInput(BaseModel):
    """Body of POST /signatures."""

    name: StrictStr
    message: StrictStr | None = None

    def to_new_signature(self) -> NewSignature:
        return NewSignature(**self.model_dump(exclude_unset=True))


class SignatureUpdate(BaseModel):
    """
    Body of PUT /signatures/{id}.

    Unknown keys (including ``id``) are ignored; an explicit ``null``
    name is rejected since every signature needs one.
    """

    model_config = ConfigDict(extra="ignore")

    name: StrictStr | None = None
    message: StrictStr | None = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("name may not be null")
        return value

    def to_patch(self) -> PartialSignature:
        return PartialSignature(**self.model_dump(exclude_unset=True))
