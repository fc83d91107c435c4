"""Quantity bookkeeping helpers.

``credit_instrument`` is the single place that returns units to an inventory
row; the allocation systems and set deletion all go through it so the
"drop units if the row is gone" policy lives in one spot.
"""

from dataclasses import replace
from typing import Dict
from pyrsistent.typing import PVector

from surgiset.components import Instrument
from surgiset.state import State
from surgiset.types import InstrumentID


def credit_instrument(
    inventory: PVector[Instrument], instrument_id: InstrumentID, quantity: int
) -> PVector[Instrument]:
    """Return ``inventory`` with ``quantity`` units added to ``instrument_id``.

    If no row matches, the units are dropped and ``inventory`` is returned
    unchanged.
    """
    for i, instrument in enumerate(inventory):
        if instrument.id == instrument_id:
            return inventory.set(
                i, replace(instrument, quantity=instrument.quantity + quantity)
            )
    return inventory


def allocated_quantity(state: State, instrument_id: InstrumentID) -> int:
    """Total units of ``instrument_id`` allocated across all sets."""
    return sum(
        si.quantity
        for s in state.sets
        for si in s.instruments
        if si.instrument_id == instrument_id
    )


def unit_total(state: State, instrument_id: InstrumentID) -> int:
    """Units on the shelf plus units allocated to sets for ``instrument_id``."""
    on_shelf = sum(i.quantity for i in state.inventory if i.id == instrument_id)
    return on_shelf + allocated_quantity(state, instrument_id)


def unit_totals(state: State) -> Dict[InstrumentID, int]:
    """``unit_total`` for every id present in inventory or in any set."""
    ids = [i.id for i in state.inventory]
    ids += [si.instrument_id for s in state.sets for si in s.instruments]
    return {iid: unit_total(state, iid) for iid in dict.fromkeys(ids)}
