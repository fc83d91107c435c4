"""Action reducer.

The exported :func:`step` is the single dispatch point from an
:mod:`surgiset.actions` record to the system implementing it. It is pure: it
returns a new :class:`surgiset.state.State`, or the input object unchanged
when the action's preconditions do not hold.
"""

from surgiset.actions import (
    Action,
    AddInstrument,
    AddInstrumentToSet,
    CreateSet,
    DeleteSet,
    RemoveInstrument,
    RemoveInstrumentFromSet,
    ReorderInventory,
    ReorderSetInstruments,
    ReturnAllToInventory,
    ToggleWishlist,
    UpdateInstrument,
    UpdateSet,
)
from surgiset.state import State
from surgiset.systems.allocation import (
    add_instrument_to_set,
    remove_instrument_from_set,
    return_all_to_inventory,
)
from surgiset.systems.inventory import (
    add_instrument,
    remove_instrument,
    reorder_inventory,
    toggle_wishlist,
    update_instrument,
)
from surgiset.systems.sets import (
    create_set,
    delete_set,
    reorder_set_instruments,
    update_set,
)


def step(state: State, action: Action) -> State:
    """Apply one store action.

    Args:
        state (State): Previous immutable store state.
        action (Action): Action record to apply.

    Returns:
        State: Next snapshot. The same object is returned when the action is a
            no-op (unknown id, insufficient quantity, out-of-range index).

    Raises:
        ValueError: If ``action`` is not a recognized action record.
    """
    if isinstance(action, AddInstrument):
        return add_instrument(state, action.draft)
    if isinstance(action, RemoveInstrument):
        return remove_instrument(state, action.instrument_id)
    if isinstance(action, UpdateInstrument):
        return update_instrument(state, action.instrument_id, action.changes)
    if isinstance(action, ToggleWishlist):
        return toggle_wishlist(state, action.instrument_id)
    if isinstance(action, ReorderInventory):
        return reorder_inventory(state, action.from_index, action.to_index)
    if isinstance(action, CreateSet):
        return create_set(state, action.name, action.description, action.icon)
    if isinstance(action, UpdateSet):
        return update_set(state, action.set_id, action.changes)
    if isinstance(action, DeleteSet):
        return delete_set(state, action.set_id)
    if isinstance(action, ReorderSetInstruments):
        return reorder_set_instruments(
            state, action.set_id, action.from_index, action.to_index
        )
    if isinstance(action, AddInstrumentToSet):
        return add_instrument_to_set(
            state, action.set_id, action.instrument_id, action.quantity
        )
    if isinstance(action, RemoveInstrumentFromSet):
        return remove_instrument_from_set(
            state, action.set_id, action.instrument_id, action.quantity
        )
    if isinstance(action, ReturnAllToInventory):
        return return_all_to_inventory(state, action.set_id)
    raise ValueError("Action is not valid")
