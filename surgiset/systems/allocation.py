"""Allocation systems.

Move instrument units between the shelf (``Instrument.quantity``) and sets
(``SetInstrument.quantity``). These are the only transitions that change
where units live, and each one debits exactly what it credits:

1. :func:`add_instrument_to_set` moves ``qty`` units from an instrument row
    into a set, merging with an existing allocation for the same instrument.
2. :func:`remove_instrument_from_set` moves ``qty`` units back; an allocation
    that reaches zero is removed from the set.
3. :func:`return_all_to_inventory` empties a set back onto the shelf.

When the instrument row no longer exists, units leaving a set are dropped
because there is no row to credit. Any failed precondition returns the
input ``State`` unchanged.
"""

from dataclasses import replace
from pyrsistent import pvector

from surgiset.components import SetInstrument
from surgiset.state import State
from surgiset.types import InstrumentID, SetID
from surgiset.utils.allocation import credit_instrument
from surgiset.utils.lookup import find_allocation, instrument_index, set_index


def add_instrument_to_set(
    state: State, set_id: SetID, instrument_id: InstrumentID, qty: int
) -> State:
    """Allocate ``qty`` shelf units of an instrument to a set.

    Arguments:
        state:
            Current immutable state.
        set_id:
            Target set.
        instrument_id:
            Instrument whose units move.
        qty:
            Units to move; must be positive and no more than the instrument's
            shelf quantity.

    Returns:
        State
            Updated state, or ``state`` itself when the set or instrument is
            missing or there are not enough units.
    """
    if qty <= 0:
        return state
    inv_idx = instrument_index(state, instrument_id)
    s_idx = set_index(state, set_id)
    if inv_idx < 0 or s_idx < 0:
        return state
    instrument = state.inventory[inv_idx]
    if instrument.quantity < qty:
        return state

    instrument_set = state.sets[s_idx]
    pos, allocation = find_allocation(instrument_set, instrument_id)
    if allocation is None:
        instruments = instrument_set.instruments.append(
            SetInstrument(instrument_id=instrument_id, quantity=qty)
        )
    else:
        instruments = instrument_set.instruments.set(
            pos, replace(allocation, quantity=allocation.quantity + qty)
        )

    return replace(
        state,
        inventory=state.inventory.set(
            inv_idx, replace(instrument, quantity=instrument.quantity - qty)
        ),
        sets=state.sets.set(s_idx, replace(instrument_set, instruments=instruments)),
    )


def remove_instrument_from_set(
    state: State, set_id: SetID, instrument_id: InstrumentID, qty: int
) -> State:
    """Return ``qty`` allocated units of an instrument from a set to the shelf."""
    if qty <= 0:
        return state
    s_idx = set_index(state, set_id)
    if s_idx < 0:
        return state
    instrument_set = state.sets[s_idx]
    pos, allocation = find_allocation(instrument_set, instrument_id)
    if allocation is None or allocation.quantity < qty:
        return state

    remaining = allocation.quantity - qty
    if remaining == 0:
        instruments = instrument_set.instruments.delete(pos)
    else:
        instruments = instrument_set.instruments.set(
            pos, replace(allocation, quantity=remaining)
        )

    return replace(
        state,
        inventory=credit_instrument(state.inventory, instrument_id, qty),
        sets=state.sets.set(s_idx, replace(instrument_set, instruments=instruments)),
    )


def return_all_to_inventory(state: State, set_id: SetID) -> State:
    """Credit every allocation of a set back to inventory and empty the set."""
    s_idx = set_index(state, set_id)
    if s_idx < 0:
        return state
    instrument_set = state.sets[s_idx]
    if not instrument_set.instruments:
        return state

    inventory = state.inventory
    for allocation in instrument_set.instruments:
        inventory = credit_instrument(
            inventory, allocation.instrument_id, allocation.quantity
        )

    return replace(
        state,
        inventory=inventory,
        sets=state.sets.set(s_idx, replace(instrument_set, instruments=pvector())),
    )
