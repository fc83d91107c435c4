"""Store action records.

Each store operation has a frozen action dataclass carrying its arguments.
:func:`surgiset.step.step` dispatches an ``Action`` to the matching system,
which lets callers queue, log or replay operations uniformly.

``ALLOCATION_ACTIONS`` lists the action types that move units between the
shelf and sets; checks like ``isinstance(action, ALLOCATION_ACTIONS)`` are
preferred over comparing class names.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from pyrsistent import pmap

from surgiset.components import InstrumentDraft
from surgiset.types import InstrumentID, SetID


@dataclass(frozen=True)
class AddInstrument:
    draft: InstrumentDraft


@dataclass(frozen=True)
class RemoveInstrument:
    instrument_id: InstrumentID


@dataclass(frozen=True)
class UpdateInstrument:
    instrument_id: InstrumentID
    changes: Mapping[str, Any] = field(default_factory=pmap)


@dataclass(frozen=True)
class ToggleWishlist:
    instrument_id: InstrumentID


@dataclass(frozen=True)
class ReorderInventory:
    from_index: int
    to_index: int


@dataclass(frozen=True)
class CreateSet:
    name: str
    description: str = ""
    icon: Optional[str] = None


@dataclass(frozen=True)
class UpdateSet:
    set_id: SetID
    changes: Mapping[str, Any] = field(default_factory=pmap)


@dataclass(frozen=True)
class DeleteSet:
    set_id: SetID


@dataclass(frozen=True)
class ReorderSetInstruments:
    set_id: SetID
    from_index: int
    to_index: int


@dataclass(frozen=True)
class AddInstrumentToSet:
    set_id: SetID
    instrument_id: InstrumentID
    quantity: int = 1


@dataclass(frozen=True)
class RemoveInstrumentFromSet:
    set_id: SetID
    instrument_id: InstrumentID
    quantity: int = 1


@dataclass(frozen=True)
class ReturnAllToInventory:
    set_id: SetID


Action = Union[
    AddInstrument,
    RemoveInstrument,
    UpdateInstrument,
    ToggleWishlist,
    ReorderInventory,
    CreateSet,
    UpdateSet,
    DeleteSet,
    ReorderSetInstruments,
    AddInstrumentToSet,
    RemoveInstrumentFromSet,
    ReturnAllToInventory,
]

ALLOCATION_ACTIONS = (
    AddInstrumentToSet,
    RemoveInstrumentFromSet,
    ReturnAllToInventory,
    DeleteSet,
)
