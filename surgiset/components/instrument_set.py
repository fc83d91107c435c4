"""Instrument set component.

A set is a named, ordered collection of :class:`SetInstrument` allocations.
The ``PVector`` keeps the user's ordering and shares structure across state
copies; at most one allocation per instrument id is ever stored.
"""

from dataclasses import dataclass, field
from pyrsistent import pvector
from pyrsistent.typing import PVector

from surgiset.components.set_instrument import SetInstrument
from surgiset.types import DEFAULT_SET_ICON, SetID


@dataclass(frozen=True)
class InstrumentSet:
    """Procedural set.

    Attributes:
        id: Opaque identifier.
        name: Display name.
        description: Free text notes.
        icon: Symbolic icon name, usually a :class:`surgiset.types.SetIcon` value.
        instruments: Ordered allocations, unique by ``instrument_id``.
    """

    id: SetID
    name: str
    description: str = ""
    icon: str = DEFAULT_SET_ICON.value
    instruments: PVector[SetInstrument] = field(default_factory=pvector)
