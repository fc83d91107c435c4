# tests/utils/test_lookup.py

from surgiset.utils.lookup import (
    UNKNOWN_INSTRUMENT_NAME,
    dangling_references,
    find_instrument,
    find_set,
    instrument_for_display,
    set_contents,
    shelf,
    wishlist,
)
from tests.test_utils import make_allocated_state, make_instrument, make_set, make_state


def test_find_instrument_and_set() -> None:
    state, ids = make_allocated_state()
    assert find_instrument(state, ids["forceps_id"]).name == "Adson Forceps"  # type: ignore[union-attr]
    assert find_set(state, ids["suture_id"]).name == "Basic Suturing"  # type: ignore[union-attr]
    assert find_instrument(state, "missing00") is None
    assert find_set(state, "missing00") is None


def test_instrument_for_display_placeholder() -> None:
    state = make_state()
    placeholder = instrument_for_display(state, "gone00001")
    assert placeholder.id == "gone00001"
    assert placeholder.name == UNKNOWN_INSTRUMENT_NAME
    assert placeholder.quantity == 0


def test_set_contents_pairs_allocations_in_order() -> None:
    state = make_state(
        instruments=[make_instrument("a", "Kelly", quantity=0)],
        sets=[make_set("s1", "Rhino", [("gone", 1), ("a", 2)])],
    )
    contents = set_contents(state, "s1")
    assert [(si.quantity, inst.name) for si, inst in contents] == [
        (1, UNKNOWN_INSTRUMENT_NAME),
        (2, "Kelly"),
    ]
    assert set_contents(state, "missing00") == []


def test_shelf_and_wishlist() -> None:
    state = make_state(
        instruments=[
            make_instrument("a", quantity=1),
            make_instrument("b", quantity=0, is_wishlist=True),
            make_instrument("c", quantity=1, is_wishlist=True),
        ]
    )
    assert [i.id for i in shelf(state)] == ["a", "c"]
    assert [i.id for i in wishlist(state)] == ["b", "c"]


def test_dangling_references() -> None:
    state = make_state(
        instruments=[make_instrument("a")],
        sets=[make_set("s1", "Rhino", [("a", 1), ("gone", 1)]), make_set("s2")],
    )
    assert dangling_references(state) == [("s1", "gone")]
