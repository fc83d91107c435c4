"""Set systems.

Create, edit, delete and reorder :class:`InstrumentSet` rows. Deleting a set
returns its allocations to inventory first (see
:func:`surgiset.systems.allocation.return_all_to_inventory`).
"""

from dataclasses import fields, replace
from typing import Any, Dict, Mapping, Optional

from surgiset.components import InstrumentSet
from surgiset.entity import new_entity_id
from surgiset.state import State
from surgiset.systems.allocation import return_all_to_inventory
from surgiset.types import DEFAULT_SET_ICON, SetID
from surgiset.utils.lookup import set_index
from surgiset.utils.ordering import move_item

# ``instruments`` only changes through the allocation systems.
_PROTECTED_FIELDS = frozenset({"id", "instruments"})


def create_set(
    state: State, name: str, description: str, icon: Optional[str] = None
) -> State:
    """Append a new empty set; ``icon`` defaults to ``layers``."""
    instrument_set = InstrumentSet(
        id=new_entity_id(),
        name=name,
        description=description,
        icon=str(icon) if icon else DEFAULT_SET_ICON.value,
    )
    return replace(state, sets=state.sets.append(instrument_set))


def update_set(state: State, set_id: SetID, changes: Mapping[str, Any]) -> State:
    """Shallow-merge ``changes`` onto a set; unknown ``set_id`` is a no-op.

    ``id`` and ``instruments`` are ignored.

    Raises:
        TypeError: If ``changes`` names a field ``InstrumentSet`` does not have.
    """
    idx = set_index(state, set_id)
    if idx < 0:
        return state

    known = {f.name for f in fields(InstrumentSet)}
    updates: Dict[str, Any] = {}
    for key, value in changes.items():
        if key not in known:
            raise TypeError(f"InstrumentSet has no field {key!r}")
        if key not in _PROTECTED_FIELDS:
            updates[key] = value

    instrument_set = state.sets[idx]
    updated = replace(instrument_set, **updates)
    if updated == instrument_set:
        return state
    return replace(state, sets=state.sets.set(idx, updated))


def delete_set(state: State, set_id: SetID) -> State:
    """Return every allocation of the set to inventory, then remove it."""
    if set_index(state, set_id) < 0:
        return state
    state = return_all_to_inventory(state, set_id)
    return replace(state, sets=state.sets.delete(set_index(state, set_id)))


def reorder_set_instruments(
    state: State, set_id: SetID, from_index: int, to_index: int
) -> State:
    """Move the allocation at ``from_index`` to ``to_index`` within a set."""
    idx = set_index(state, set_id)
    if idx < 0:
        return state
    instrument_set = state.sets[idx]
    instruments = move_item(instrument_set.instruments, from_index, to_index)
    if instruments is instrument_set.instruments:
        return state
    return replace(
        state,
        sets=state.sets.set(idx, replace(instrument_set, instruments=instruments)),
    )
