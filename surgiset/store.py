"""Inventory store container.

:class:`InstrumentStore` owns the current :class:`surgiset.state.State`
snapshot for the application. Each operation builds an action, runs it
through :func:`surgiset.step.step`, swaps in the resulting snapshot,
notifies subscribers and queues a write of the new state. The store is
created by the application root (:mod:`surgiset.app`); there is no
module-level instance.

Operations never raise for well-formed arguments: a failed precondition
leaves ``store.state`` as the very same object and nothing is persisted.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional

from surgiset.actions import (
    ALLOCATION_ACTIONS,
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
from surgiset.components import InstrumentDraft
from surgiset.persistence.base import StorageBackend, StorageError
from surgiset.persistence.codec import DocumentError, dumps_state, loads_state
from surgiset.persistence.persister import Persister
from surgiset.state import State
from surgiset.step import step
from surgiset.types import InstrumentID, Namespace, SetID

logger = logging.getLogger(__name__)

Listener = Callable[[State, State], None]


def load_state(
    storage: StorageBackend, namespace: Namespace, default: Callable[[], State]
) -> State:
    """Read the persisted state, falling back to ``default()``.

    A missing document is the normal first-launch case. An unreadable or
    corrupt document is logged and also replaced by the default.
    """
    try:
        blob = storage.load(namespace)
    except StorageError:
        logger.exception("Failed to load %s; starting from defaults", namespace)
        return default()
    if blob is None:
        return default()
    try:
        return loads_state(blob)
    except DocumentError as e:
        logger.warning("Ignoring corrupt %s document: %s", namespace, e)
        return default()


class InstrumentStore:
    def __init__(
        self,
        state: Optional[State] = None,
        persister: Optional[Persister] = None,
        namespace: Namespace = "instrument-storage",
    ) -> None:
        self._state = state if state is not None else State()
        self._persister = persister
        self.namespace = namespace
        self._listeners: List[Listener] = []

    @property
    def state(self) -> State:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(new_state, old_state)`` after every change.

        A listener that raises is logged and skipped; the remaining listeners
        still run.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> State:
        previous = self._state
        state = step(previous, action)
        if state is previous:
            logger.debug("No-op %s", action)
            return state
        if isinstance(action, ALLOCATION_ACTIONS):
            logger.debug("Allocation change %s", action)
        self._state = state
        if self._persister is not None:
            self._persister.submit(self.namespace, dumps_state(state))
        for listener in list(self._listeners):
            try:
                listener(state, previous)
            except Exception:
                logger.exception("Store listener %r failed", listener)
        return state

    # -------- Inventory --------

    def add_instrument(self, draft: InstrumentDraft) -> State:
        return self.dispatch(AddInstrument(draft))

    def remove_instrument(self, instrument_id: InstrumentID) -> State:
        return self.dispatch(RemoveInstrument(instrument_id))

    def update_instrument(
        self, instrument_id: InstrumentID, changes: Mapping[str, Any]
    ) -> State:
        return self.dispatch(UpdateInstrument(instrument_id, changes))

    def toggle_wishlist(self, instrument_id: InstrumentID) -> State:
        return self.dispatch(ToggleWishlist(instrument_id))

    def reorder_inventory(self, from_index: int, to_index: int) -> State:
        return self.dispatch(ReorderInventory(from_index, to_index))

    # -------- Sets --------

    def create_set(
        self, name: str, description: str = "", icon: Optional[str] = None
    ) -> State:
        return self.dispatch(CreateSet(name, description, icon))

    def update_set(self, set_id: SetID, changes: Mapping[str, Any]) -> State:
        return self.dispatch(UpdateSet(set_id, changes))

    def delete_set(self, set_id: SetID) -> State:
        return self.dispatch(DeleteSet(set_id))

    def reorder_set_instruments(
        self, set_id: SetID, from_index: int, to_index: int
    ) -> State:
        return self.dispatch(ReorderSetInstruments(set_id, from_index, to_index))

    # -------- Allocation --------

    def add_instrument_to_set(
        self, set_id: SetID, instrument_id: InstrumentID, quantity: int
    ) -> State:
        return self.dispatch(AddInstrumentToSet(set_id, instrument_id, quantity))

    def remove_instrument_from_set(
        self, set_id: SetID, instrument_id: InstrumentID, quantity: int
    ) -> State:
        return self.dispatch(RemoveInstrumentFromSet(set_id, instrument_id, quantity))

    def return_all_to_inventory(self, set_id: SetID) -> State:
        return self.dispatch(ReturnAllToInventory(set_id))
