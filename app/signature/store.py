"""
SignatureStore — In-memory guestbook collection.

Every read returns deep copies and every write stores deep copies, so a
caller holding on to a returned record (or to the list it seeded the
store with) can never change what the store holds.
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from app.core.exceptions import NotFoundError
from app.signature.model import NewSignature, PartialSignature, Signature
from app.signature.utils import matches, protect_from_mutations

logger = logging.getLogger(__name__)


def epoch_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


class SignatureStore:
    """
    Ordered, in-memory store of signatures with matcher-based queries.

    Matcher arguments are either a PartialSignature or keyword fields:
    ``store.find(PartialSignature(name="Ada"))`` and
    ``store.find(name="Ada")`` are equivalent. When several records
    match, the first in insertion order wins.
    """

    def __init__(
        self,
        signatures: Iterable[Signature] | None = None,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        self._signatures: list[Signature] = []
        self._clock = clock
        self._last_id: int | None = None
        self._lock = threading.RLock()
        if signatures is not None:
            self.set_all(signatures)

    # ── Whole collection ───────────────────────────────────────────

    def get_all(self) -> list[Signature]:
        """Return a deep copy of every signature, in insertion order."""
        with self._lock:
            return protect_from_mutations(self._signatures)

    def set_all(self, signatures: Iterable[Signature]) -> None:
        """Replace the stored collection with a deep copy of *signatures*."""
        with self._lock:
            self._signatures = protect_from_mutations(signatures)
            logger.debug("Collection replaced (%d signatures)", len(self._signatures))

    # ── Queries ────────────────────────────────────────────────────

    def find_index(
        self, matcher: PartialSignature | None = None, **fields: Any
    ) -> int | None:
        """
        Index of the first signature matching *matcher*, or None.

        An empty matcher matches index 0 of a non-empty collection.
        """
        matcher = _as_partial(matcher, fields)
        if matcher is None:
            return None
        with self._lock:
            for index, signature in enumerate(self._signatures):
                if matches(signature, matcher):
                    return index
        return None

    def find(
        self, matcher: PartialSignature | None = None, **fields: Any
    ) -> Signature | None:
        """Deep copy of the first signature matching *matcher*, or None."""
        matcher = _as_partial(matcher, fields)
        if matcher is None:
            return None
        with self._lock:
            index = self.find_index(matcher)
            if index is None:
                return None
            return copy.deepcopy(self._signatures[index])

    def find_or_fail(
        self, matcher: PartialSignature | None = None, **fields: Any
    ) -> Signature:
        """As :meth:`find`, but raises NotFoundError instead of returning None."""
        partial = _as_partial(matcher, fields)
        signature = self.find(partial) if partial is not None else None
        if signature is None:
            raise NotFoundError(partial.fields() if partial is not None else fields)
        return signature

    def find_by_id(self, signature_id: int) -> Signature | None:
        return self.find(id=signature_id)

    def find_by_id_or_fail(self, signature_id: int) -> Signature:
        return self.find_or_fail(id=signature_id)

    # ── Mutations ──────────────────────────────────────────────────

    def insert(self, payload: NewSignature) -> Signature:
        """
        Append a new signature built from *payload* plus a fresh id.

        *payload* itself is left untouched; the stored record is returned
        as a copy.
        """
        with self._lock:
            signature = Signature(
                id=self._next_id(),
                **payload.model_dump(exclude_unset=True),
            )
            self._signatures.append(signature)
            logger.debug("Inserted signature id=%d", signature.id)
            return copy.deepcopy(signature)

    def update(
        self, matcher: PartialSignature, patch: PartialSignature
    ) -> Signature | None:
        """
        Merge *patch* over the first signature matching *matcher*.

        Fields set on the patch override the record's, fields left unset
        keep their value. Returns the updated record, or None (with no
        side effects) when nothing matches.

        A patch that would leave the record without an id or name raises
        pydantic's ValidationError before anything is stored.
        """
        with self._lock:
            index = self.find_index(matcher)
            if index is None:
                return None
            current = self._signatures[index]
            updated = Signature.model_validate(
                {**current.model_dump(exclude_unset=True), **copy.deepcopy(patch.fields())}
            )
            self._signatures[index] = updated
            logger.debug("Updated signature at index %d (id=%s)", index, updated.id)
            return copy.deepcopy(updated)

    def update_by_id(
        self, signature_id: int, patch: PartialSignature
    ) -> Signature | None:
        matcher = _as_partial(None, {"id": signature_id})
        if matcher is None:
            return None
        return self.update(matcher, patch)

    def remove(self, matcher: PartialSignature | None = None, **fields: Any) -> bool:
        """
        Remove the first signature matching *matcher*.

        Returns True if a signature was removed, False otherwise.
        """
        matcher = _as_partial(matcher, fields)
        if matcher is None:
            return False
        with self._lock:
            index = self.find_index(matcher)
            if index is None:
                return False
            removed = self._signatures.pop(index)
            logger.debug("Removed signature id=%s", removed.id)
            return True

    def remove_by_id(self, signature_id: int) -> bool:
        return self.remove(id=signature_id)

    # ── Internals ──────────────────────────────────────────────────

    def _next_id(self) -> int:
        """
        Clock-derived id, bumped past the last issued id and any id
        already present so two inserts in one millisecond stay distinct.
        """
        candidate = self._clock()
        if self._last_id is not None and candidate <= self._last_id:
            candidate = self._last_id + 1
        taken = {signature.id for signature in self._signatures}
        while candidate in taken:
            candidate += 1
        self._last_id = candidate
        return candidate

    # ── Dunder helpers ─────────────────────────────────────────────

    def __len__(self) -> int:
        with self._lock:
            return len(self._signatures)

    def __contains__(self, signature_id: object) -> bool:
        with self._lock:
            return any(s.id == signature_id for s in self._signatures)

    def __repr__(self) -> str:
        return f"SignatureStore({len(self)} signatures)"


def _as_partial(
    matcher: PartialSignature | None, fields: dict[str, Any]
) -> PartialSignature | None:
    """
    The matcher to apply, or None when *fields* cannot describe any
    signature (unknown field, wrongly typed value).
    """
    if matcher is not None and fields:
        raise TypeError("Pass either a matcher or keyword fields, not both.")
    if matcher is not None:
        return matcher
    try:
        return PartialSignature(**fields)
    except ValidationError:
        logger.debug("Matcher %r matches no signature", fields)
        return None
