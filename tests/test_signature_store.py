"""Tests for SignatureStore."""

import pytest
from pydantic import ValidationError

from app.core.exceptions import NotFoundError
from app.signature.model import NewSignature, PartialSignature, Signature
from app.signature.store import SignatureStore


REFERENCE = [
    Signature(id=1, name="Apple"),
    Signature(id=2, name="Apple", message="Not my first signature"),
    Signature(id=3, name="Carrot"),
    Signature(id=4, name="Carrot", message="Not my first message"),
]


def _store() -> SignatureStore:
    return SignatureStore(REFERENCE)


# ── get_all / set_all ──────────────────────────────────────────────

def test_get_all_returns_everything_in_order():
    store = SignatureStore([Signature(id=1, name="Ada Lovelace"), Signature(id=2, name="Alan Turing")])
    names = [s.name for s in store.get_all()]
    assert names == ["Ada Lovelace", "Alan Turing"]


def test_get_all_is_resistant_to_mutation():
    initial = [Signature(id=1, name="Harry Potter"), Signature(id=2, name="Ginny Weasley")]
    store = SignatureStore()
    store.set_all(initial)

    signatures = store.get_all()
    initial[0].name = "oopsie"
    signatures[1].name = "whoops"
    signatures.append(Signature(id=3, name="Ron"))

    assert [s.name for s in store.get_all()] == ["Harry Potter", "Ginny Weasley"]


def test_set_all_replaces_collection():
    store = _store()
    store.set_all([Signature(id=9, name="Solo")])
    assert len(store) == 1
    assert store.find_by_id(1) is None


# ── find_index / find ──────────────────────────────────────────────

def test_find_index_first_match():
    store = _store()
    assert store.find_index(PartialSignature()) == 0  # empty matcher -> first
    assert store.find_index(id=2) == 1
    assert store.find_index(name="Carrot") == 2
    assert store.find_index(name="Carrot", message="Not my first message") == 3
    assert store.find_index(id=1, name="Carrot") is None


def test_find_index_empty_collection():
    assert SignatureStore().find_index() is None


def test_find_returns_first_match():
    store = _store()
    assert store.find() == REFERENCE[0]
    assert store.find(PartialSignature(id=2)) == REFERENCE[1]
    assert store.find(name="Carrot") == REFERENCE[2]
    assert store.find(id=1, name="Carrot") is None


def test_find_empty_collection_is_none():
    assert SignatureStore().find() is None


def test_find_message_none_matches_records_without_message():
    store = _store()
    assert store.find(name="Carrot", message=None).id == 3


def test_find_is_resistant_to_mutation():
    store = SignatureStore([Signature(id=10, name="Apple")])
    found = store.find(id=10)
    found.name = "WAKKA WAKKA"
    assert store.find(id=10).name == "Apple"


def test_find_rejects_matcher_and_fields_together():
    with pytest.raises(TypeError):
        _store().find(PartialSignature(id=1), name="Apple")


def test_find_by_id():
    store = _store()
    assert store.find_by_id(3).name == "Carrot"
    assert store.find_by_id(99) is None


def test_find_or_fail():
    store = _store()
    assert store.find_or_fail(name="Apple").id == 1
    with pytest.raises(NotFoundError) as excinfo:
        store.find_or_fail(name="Banana")
    assert excinfo.value.matcher == {"name": "Banana"}


def test_find_by_id_or_fail():
    store = _store()
    assert store.find_by_id_or_fail(4).message == "Not my first message"
    with pytest.raises(NotFoundError):
        store.find_by_id_or_fail(5)


# ── insert ─────────────────────────────────────────────────────────

def test_insert_assigns_id_from_clock():
    store = SignatureStore(clock=lambda: 1_700_000_000_000)
    payload = NewSignature(name="X")

    signature = store.insert(payload)

    assert signature.name == "X"
    assert signature.id == 1_700_000_000_000
    assert signature.message is None
    assert not hasattr(payload, "id")
    assert store.get_all() == [signature]


def test_insert_appends_to_end():
    store = _store()
    store.insert(NewSignature(name="Zed", message="hi"))
    last = store.get_all()[-1]
    assert last.name == "Zed"
    assert last.message == "hi"


def test_insert_ids_unique_within_same_millisecond():
    store = SignatureStore(clock=lambda: 500)
    ids = [store.insert(NewSignature(name=str(i))).id for i in range(3)]
    assert ids == [500, 501, 502]


def test_insert_skips_ids_already_seeded():
    store = SignatureStore([Signature(id=500, name="Seed")], clock=lambda: 500)
    assert store.insert(NewSignature(name="New")).id == 501


def test_insert_is_resistant_to_mutation():
    store = SignatureStore()
    signature = store.insert(NewSignature(name="Ada"))
    signature.name = "Changed"
    assert store.find_by_id(signature.id).name == "Ada"


# ── update ─────────────────────────────────────────────────────────

def test_update_first_match_then_next():
    store = SignatureStore([
        Signature(id=1, name="Apple"),
        Signature(id=2, name="Apple", message="m"),
    ])
    first = store.update(PartialSignature(name="Apple"), PartialSignature(name="Carrot"))
    assert first.id == 1
    second = store.update(PartialSignature(name="Apple"), PartialSignature(name="Carrot"))
    assert second.id == 2

    assert [s.to_json() for s in store.get_all()] == [
        {"id": 1, "name": "Carrot"},
        {"id": 2, "name": "Carrot", "message": "m"},
    ]


def test_update_merges_rather_than_replaces():
    store = SignatureStore([Signature(id=5, name="Apple")])
    updated = store.update(PartialSignature(id=5), PartialSignature(message="hi"))
    assert updated == Signature(id=5, name="Apple", message="hi")
    assert store.find_by_id(5) == updated


def test_update_no_match_has_no_side_effects():
    store = _store()
    assert store.update(PartialSignature(name="Ghost"), PartialSignature(name="X")) is None
    assert store.get_all() == REFERENCE


def test_update_by_id():
    store = _store()
    updated = store.update_by_id(3, PartialSignature(message="now with a message"))
    assert updated.name == "Carrot"
    assert store.find_by_id(3).message == "now with a message"
    assert store.update_by_id(42, PartialSignature(name="Nobody")) is None


# ── remove ─────────────────────────────────────────────────────────

def test_remove_absent_returns_false():
    store = _store()
    assert store.remove(name="Ghost") is False
    assert store.get_all() == REFERENCE


def test_remove_first_match_only():
    store = SignatureStore([Signature(id=1, name="Ada"), Signature(id=2, name="Ada")])
    assert store.remove(name="Ada") is True
    assert [s.id for s in store.get_all()] == [2]


def test_remove_index_zero():
    store = _store()
    assert store.remove(id=1) is True
    assert len(store) == 3
    assert 1 not in store


def test_remove_by_id():
    store = _store()
    assert store.remove_by_id(4) is True
    assert store.remove_by_id(4) is False
    assert len(store) == 3


# ── Malformed matchers ─────────────────────────────────────────────

def test_wrongly_typed_matcher_matches_nothing():
    store = SignatureStore([Signature(id=1, name="Ada")])
    assert store.find(id="abc") is None
    assert store.find(id="1") is None
    assert store.find_by_id("abc") is None
    assert store.find_index(name=7) is None
    assert store.find(colour="red") is None


def test_wrongly_typed_matcher_leaves_collection_alone():
    store = SignatureStore([Signature(id=1, name="Ada")])
    assert store.update_by_id("1", PartialSignature(name="Eve")) is None
    assert store.remove(id="1") is False
    assert store.remove_by_id("abc") is False
    assert store.get_all() == [Signature(id=1, name="Ada")]


def test_wrongly_typed_matcher_or_fail_raises_not_found():
    store = SignatureStore([Signature(id=1, name="Ada")])
    with pytest.raises(NotFoundError):
        store.find_or_fail(id="1")
    with pytest.raises(NotFoundError):
        store.find_by_id_or_fail("abc")


def test_update_cannot_clear_required_fields():
    store = SignatureStore([Signature(id=1, name="Ada")])
    with pytest.raises(ValidationError):
        store.update(PartialSignature(id=1), PartialSignature(name=None))
    with pytest.raises(ValidationError):
        store.update(PartialSignature(id=1), PartialSignature(id=None))
    assert store.get_all() == [Signature(id=1, name="Ada")]


def test_update_can_clear_message():
    store = SignatureStore([Signature(id=1, name="Ada", message="hi")])
    updated = store.update_by_id(1, PartialSignature(message=None))
    assert updated.to_json() == {"id": 1, "name": "Ada"}


def test_len_and_contains():
    store = _store()
    assert len(store) == 4
    assert 2 in store
    assert 99 not in store
    assert "4 signatures" in repr(store)
