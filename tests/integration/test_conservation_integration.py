import random
from typing import Dict

import pytest

from surgiset.components import InstrumentDraft
from surgiset.state import State
from surgiset.systems.allocation import (
    add_instrument_to_set,
    remove_instrument_from_set,
    return_all_to_inventory,
)
from surgiset.systems.inventory import add_instrument, reorder_inventory
from surgiset.systems.sets import create_set, reorder_set_instruments
from surgiset.utils.allocation import unit_totals


def _seed_state() -> State:
    state = State()
    for name, quantity in [("Scalpel", 3), ("Adson Forceps", 2), ("Senn Retractor", 1)]:
        state = add_instrument(state, InstrumentDraft(name=name, quantity=quantity))
    for name in ["Rhinoplasty", "Basic Suturing", "Blepharoplasty"]:
        state = create_set(state, name, "")
    return state


def _check_invariants(state: State, expected: Dict[str, int]) -> None:
    assert unit_totals(state) == expected
    assert all(i.quantity >= 0 for i in state.inventory)
    for s in state.sets:
        ids = [si.instrument_id for si in s.instruments]
        assert len(ids) == len(set(ids))
        assert all(si.quantity > 0 for si in s.instruments)


@pytest.mark.parametrize("seed", range(10))
def test_random_allocation_sequences_conserve_units(seed: int) -> None:
    rng = random.Random(seed)
    state = _seed_state()
    expected = {i.id: 1 for i in state.inventory}
    instrument_ids = list(expected) + ["missing00"]
    set_ids = [s.id for s in state.sets] + ["missing00"]

    for _ in range(200):
        op = rng.randrange(5)
        set_id = rng.choice(set_ids)
        instrument_id = rng.choice(instrument_ids)
        qty = rng.randint(-1, 2)
        if op == 0:
            state = add_instrument_to_set(state, set_id, instrument_id, qty)
        elif op == 1:
            state = remove_instrument_from_set(state, set_id, instrument_id, qty)
        elif op == 2:
            state = return_all_to_inventory(state, set_id)
        elif op == 3:
            state = reorder_inventory(state, rng.randint(-2, 7), rng.randint(-2, 7))
        else:
            state = reorder_set_instruments(
                state, set_id, rng.randint(0, 3), rng.randint(0, 3)
            )
        _check_invariants(state, expected)


def test_over_allocation_leaves_state_unchanged() -> None:
    state = _seed_state()
    instrument = state.inventory[0]
    set_id = state.sets[0].id
    result = add_instrument_to_set(state, set_id, instrument.id, instrument.quantity + 1)
    assert result is state
