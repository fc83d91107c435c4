import pytest

from surgiset.components import InstrumentDraft
from surgiset.state import State
from surgiset.systems.inventory import (
    add_instrument,
    remove_instrument,
    reorder_inventory,
    toggle_wishlist,
    update_instrument,
)
from tests.test_utils import make_allocated_state, make_instrument, make_set, make_state


def test_add_instrument_fans_out_single_unit_rows() -> None:
    state = add_instrument(State(), InstrumentDraft(name="Scalpel", quantity=3))
    assert len(state.inventory) == 3
    assert all(i.quantity == 1 for i in state.inventory)
    assert all(i.name == "Scalpel" for i in state.inventory)
    assert len({i.id for i in state.inventory}) == 3


def test_add_instrument_zero_quantity_creates_one_row() -> None:
    state = add_instrument(State(), InstrumentDraft(name="Mayo Scissors", quantity=0))
    assert len(state.inventory) == 1
    assert state.inventory[0].quantity == 1


def test_add_instrument_negative_quantity_creates_one_row() -> None:
    state = State()
    new_state = add_instrument(state, InstrumentDraft(name="Scalpel", quantity=-2))
    assert new_state is not state
    assert len(new_state.inventory) == 1
    assert new_state.inventory[0].quantity == 1


def test_add_instrument_copies_draft_fields_and_appends() -> None:
    existing = make_instrument("existing1", "Kelly Forceps")
    state = make_state([existing])
    draft = InstrumentDraft(
        name="Freer Elevator",
        description="Dissectors & Elevators",
        quantity=2,
        image="images/freer.jpg",
        is_wishlist=True,
    )
    new_state = add_instrument(state, draft)
    assert new_state.inventory[0] == existing
    for row in new_state.inventory[1:]:
        assert row.description == "Dissectors & Elevators"
        assert row.image == "images/freer.jpg"
        assert row.is_wishlist
    # previous snapshot untouched
    assert len(state.inventory) == 1


def test_add_instrument_allows_empty_name() -> None:
    state = add_instrument(State(), InstrumentDraft(name=""))
    assert state.inventory[0].name == ""


def test_remove_instrument_strips_every_set() -> None:
    state, ids = make_allocated_state()
    new_state = remove_instrument(state, ids["scalpel_id"])
    assert all(i.id != ids["scalpel_id"] for i in new_state.inventory)
    for s in new_state.sets:
        assert all(si.instrument_id != ids["scalpel_id"] for si in s.instruments)
    # forceps allocation in the rhino set is untouched
    rhino = new_state.sets[0]
    assert [(si.instrument_id, si.quantity) for si in rhino.instruments] == [
        (ids["forceps_id"], 1)
    ]


def test_remove_instrument_unknown_id_is_noop() -> None:
    state, _ = make_allocated_state()
    assert remove_instrument(state, "missing00") is state


def test_remove_instrument_cleans_dangling_references() -> None:
    state = make_state(sets=[make_set("set000001", "Rhino", [("gone00001", 2)])])
    new_state = remove_instrument(state, "gone00001")
    assert len(new_state.sets[0].instruments) == 0


def test_update_instrument_merges_fields() -> None:
    state = make_state([make_instrument("inst00001", "Old name")])
    new_state = update_instrument(
        state, "inst00001", {"name": "Cottle Elevator", "description": "Elevators"}
    )
    assert new_state.inventory[0].name == "Cottle Elevator"
    assert new_state.inventory[0].description == "Elevators"
    assert new_state.inventory[0].quantity == 1


@pytest.mark.parametrize(
    "requested, expected",
    [(5, 1), (1, 1), (0, 1), (-2, 0), (None, 1)],
)
def test_update_instrument_clamps_quantity(requested: int | None, expected: int) -> None:
    state = make_state([make_instrument("inst00001", quantity=1)])
    new_state = update_instrument(state, "inst00001", {"quantity": requested})
    assert new_state.inventory[0].quantity == expected


def test_update_instrument_zero_quantity_keeps_shelf_unit() -> None:
    state = make_state([make_instrument("inst00001", quantity=1)])
    assert update_instrument(state, "inst00001", {"quantity": 0}) is state
    new_state = update_instrument(state, "inst00001", {"quantity": 0, "name": "Iris"})
    assert new_state.inventory[0].quantity == 1
    assert new_state.inventory[0].name == "Iris"


def test_update_instrument_never_raises_quantity_above_one() -> None:
    state = make_state([make_instrument("inst00001", quantity=1)])
    assert update_instrument(state, "inst00001", {"quantity": 4}) is state


def test_update_instrument_ignores_id() -> None:
    state = make_state([make_instrument("inst00001", "Iris Scissors")])
    new_state = update_instrument(state, "inst00001", {"id": "other0001", "name": "X"})
    assert new_state.inventory[0].id == "inst00001"
    assert new_state.inventory[0].name == "X"


def test_update_instrument_unknown_id_is_noop() -> None:
    state = make_state([make_instrument("inst00001")])
    assert update_instrument(state, "missing00", {"name": "X"}) is state


def test_update_instrument_rejects_unknown_field() -> None:
    state = make_state([make_instrument("inst00001")])
    with pytest.raises(TypeError):
        update_instrument(state, "inst00001", {"colour": "red"})


def test_toggle_wishlist() -> None:
    state = make_state([make_instrument("inst00001", quantity=1)])
    once = toggle_wishlist(state, "inst00001")
    assert once.inventory[0].is_wishlist
    assert once.inventory[0].quantity == 1
    twice = toggle_wishlist(once, "inst00001")
    assert not twice.inventory[0].is_wishlist
    assert toggle_wishlist(state, "missing00") is state


def test_reorder_inventory_moves_element() -> None:
    state = make_state([make_instrument(n, n) for n in ("X", "Y", "Z", "W")])
    new_state = reorder_inventory(state, 0, 2)
    assert [i.id for i in new_state.inventory] == ["Y", "Z", "X", "W"]


def test_reorder_inventory_past_end_appends() -> None:
    state = make_state([make_instrument(n, n) for n in ("X", "Y", "Z")])
    new_state = reorder_inventory(state, 0, 10)
    assert [i.id for i in new_state.inventory] == ["Y", "Z", "X"]


def test_reorder_inventory_invalid_from_is_noop() -> None:
    state = make_state([make_instrument(n, n) for n in ("X", "Y")])
    assert reorder_inventory(state, 5, 0) is state
    assert reorder_inventory(state, 1, 1) is state
