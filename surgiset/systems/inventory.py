"""Inventory systems.

Create, edit, remove and reorder :class:`Instrument` rows. Every function is
pure: it takes a ``State`` and returns a new ``State``, or the same object
when there is nothing to do (unknown id, out-of-range index).
"""

from dataclasses import fields, replace
from typing import Any, Dict, Mapping, Optional
from pyrsistent import pvector

from surgiset.components import Instrument, InstrumentDraft
from surgiset.entity import new_entity_ids
from surgiset.state import State
from surgiset.types import InstrumentID
from surgiset.utils.lookup import instrument_index
from surgiset.utils.ordering import move_item

# Editing may lower an instrument's shelf quantity but never raise it above
# this; only returning units from a set can.
MAX_EDITABLE_QUANTITY = 1

_IMMUTABLE_FIELDS = frozenset({"id"})


def add_instrument(state: State, draft: InstrumentDraft) -> State:
    """Append ``draft.quantity`` independent single-unit rows.

    Each row gets its own fresh id and ``quantity=1``; the remaining draft
    fields are copied onto every row. A falsy or negative quantity creates one
    row.
    """
    count = max(draft.quantity or 1, 1)
    rows = [
        Instrument(
            id=instrument_id,
            name=draft.name,
            description=draft.description,
            quantity=1,
            image=draft.image,
            is_wishlist=draft.is_wishlist,
        )
        for instrument_id in new_entity_ids(count)
    ]
    return replace(state, inventory=state.inventory.extend(rows))


def remove_instrument(state: State, instrument_id: InstrumentID) -> State:
    """Delete an instrument row and strip it from every set.

    Units allocated to sets for this instrument are discarded together with
    the row; they are not returned anywhere.
    """
    idx = instrument_index(state, instrument_id)
    referenced = any(
        si.instrument_id == instrument_id for s in state.sets for si in s.instruments
    )
    if idx < 0 and not referenced:
        return state

    inventory = state.inventory.delete(idx) if idx >= 0 else state.inventory
    sets = state.sets
    if referenced:
        sets = pvector(
            replace(
                s,
                instruments=pvector(
                    si for si in s.instruments if si.instrument_id != instrument_id
                ),
            )
            if any(si.instrument_id == instrument_id for si in s.instruments)
            else s
            for s in state.sets
        )
    return replace(state, inventory=inventory, sets=sets)


def update_instrument(
    state: State, instrument_id: InstrumentID, changes: Mapping[str, Any]
) -> State:
    """Shallow-merge ``changes`` onto an instrument.

    ``changes`` is keyed by :class:`Instrument` field name. ``id`` is ignored.
    A non-zero ``quantity`` is clamped into ``[0, MAX_EDITABLE_QUANTITY]``;
    ``0`` or ``None`` leaves the current quantity unchanged.

    Raises:
        TypeError: If ``changes`` names a field ``Instrument`` does not have.
    """
    idx = instrument_index(state, instrument_id)
    if idx < 0:
        return state

    allowed = {f.name for f in fields(Instrument)} - _IMMUTABLE_FIELDS
    updates: Dict[str, Any] = {}
    for key, value in changes.items():
        if key in _IMMUTABLE_FIELDS:
            continue
        if key not in allowed:
            raise TypeError(f"Instrument has no field {key!r}")
        updates[key] = value

    quantity: Optional[int] = updates.pop("quantity", None)
    if quantity:
        updates["quantity"] = max(0, min(quantity, MAX_EDITABLE_QUANTITY))

    instrument = state.inventory[idx]
    updated = replace(instrument, **updates)
    if updated == instrument:
        return state
    return replace(state, inventory=state.inventory.set(idx, updated))


def toggle_wishlist(state: State, instrument_id: InstrumentID) -> State:
    """Flip the wishlist flag of an instrument."""
    idx = instrument_index(state, instrument_id)
    if idx < 0:
        return state
    instrument = state.inventory[idx]
    return replace(
        state,
        inventory=state.inventory.set(
            idx, replace(instrument, is_wishlist=not instrument.is_wishlist)
        ),
    )


def reorder_inventory(state: State, from_index: int, to_index: int) -> State:
    """Move the inventory row at ``from_index`` to ``to_index``."""
    inventory = move_item(state.inventory, from_index, to_index)
    if inventory is state.inventory:
        return state
    return replace(state, inventory=inventory)
