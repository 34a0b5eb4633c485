"""
Exceptions shared by the store and the API layer.
"""

from __future__ import annotations

from typing import Any


class NotFoundError(LookupError):
    """Raised by the ``*_or_fail`` lookups when no signature matches."""

    def __init__(self, matcher: dict[str, Any]) -> None:
        self.matcher = matcher
        super().__init__(f"No signature exists with the data {matcher!r}")


class ValidationError(ValueError):
    """
    A request payload failed validation.

    ``fields`` maps each offending field to a client-facing message.
    """

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = fields
        super().__init__("; ".join(f"{k}: {v}" for k, v in fields.items()))
