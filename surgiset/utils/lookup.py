"""Read-only queries over a :class:`surgiset.state.State` snapshot.

All functions are pure. Lookups return ``None`` (or ``-1`` for index
helpers) instead of raising so that systems can turn a missing id into a
no-op.
"""

from typing import List, Optional, Tuple

from surgiset.components import Instrument, InstrumentSet, SetInstrument
from surgiset.state import State
from surgiset.types import InstrumentID, SetID

UNKNOWN_INSTRUMENT_NAME = "Unknown Instrument"


def instrument_index(state: State, instrument_id: InstrumentID) -> int:
    """Return the inventory position of ``instrument_id`` or ``-1``."""
    for i, instrument in enumerate(state.inventory):
        if instrument.id == instrument_id:
            return i
    return -1


def set_index(state: State, set_id: SetID) -> int:
    """Return the position of ``set_id`` in ``state.sets`` or ``-1``."""
    for i, instrument_set in enumerate(state.sets):
        if instrument_set.id == set_id:
            return i
    return -1


def find_instrument(state: State, instrument_id: InstrumentID) -> Optional[Instrument]:
    idx = instrument_index(state, instrument_id)
    return state.inventory[idx] if idx >= 0 else None


def find_set(state: State, set_id: SetID) -> Optional[InstrumentSet]:
    idx = set_index(state, set_id)
    return state.sets[idx] if idx >= 0 else None


def find_allocation(
    instrument_set: InstrumentSet, instrument_id: InstrumentID
) -> Tuple[int, Optional[SetInstrument]]:
    """Return ``(position, allocation)`` for ``instrument_id`` within a set."""
    for i, allocation in enumerate(instrument_set.instruments):
        if allocation.instrument_id == instrument_id:
            return i, allocation
    return -1, None


def instrument_for_display(state: State, instrument_id: InstrumentID) -> Instrument:
    """Return the instrument, or a placeholder if the reference is dangling.

    The placeholder keeps the requested id, has quantity 0 and is named
    ``"Unknown Instrument"``.
    """
    instrument = find_instrument(state, instrument_id)
    if instrument is None:
        return Instrument(id=instrument_id, name=UNKNOWN_INSTRUMENT_NAME, quantity=0)
    return instrument


def set_contents(
    state: State, set_id: SetID
) -> List[Tuple[SetInstrument, Instrument]]:
    """Return a set's allocations paired with their instruments, in set order."""
    instrument_set = find_set(state, set_id)
    if instrument_set is None:
        return []
    return [
        (allocation, instrument_for_display(state, allocation.instrument_id))
        for allocation in instrument_set.instruments
    ]


def shelf(state: State) -> List[Instrument]:
    """Inventory rows with at least one unallocated unit."""
    return [i for i in state.inventory if i.quantity > 0]


def wishlist(state: State) -> List[Instrument]:
    return [i for i in state.inventory if i.is_wishlist]


def dangling_references(state: State) -> List[Tuple[SetID, InstrumentID]]:
    """Return ``(set_id, instrument_id)`` pairs pointing at missing instruments."""
    known = {i.id for i in state.inventory}
    return [
        (s.id, si.instrument_id)
        for s in state.sets
        for si in s.instruments
        if si.instrument_id not in known
    ]
