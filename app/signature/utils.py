"""
Helpers for matching and copying signature records.
"""

from __future__ import annotations

import copy
from typing import Iterable, TypeVar

from app.signature.model import PartialSignature, Signature

T = TypeVar("T")


def matches(signature: Signature, matcher: PartialSignature) -> bool:
    """
    Subset-equality test: every field set on *matcher* must equal the
    same field on *signature*. Fields not set on the matcher are not
    checked, so an empty matcher matches any signature.
    """
    for field, value in matcher.fields().items():
        if getattr(signature, field) != value:
            return False
    return True


def protect_from_mutations(items: Iterable[T]) -> list[T]:
    """Return a new list holding deep copies of *items*."""
    return [copy.deepcopy(item) for item in items]
