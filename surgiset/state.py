"""Core immutable inventory ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the
whole inventory/set store at one point in time. Every store operation is a
pure function that takes a previous ``State`` plus arguments and returns a
*new* ``State``; nothing is mutated in place. Readers that hold an older
snapshot are unaffected by later operations.

Design notes:

* Both collections are **persistent vectors** (``pyrsistent.PVector``) so
    user ordering is preserved and unchanged rows are shared between
    snapshots.
* A set's allocations reference inventory rows by id. The quantity on an
    inventory row plus the quantities allocated to it across all sets is
    conserved by the allocation systems in :mod:`surgiset.systems.allocation`.
* Operations whose preconditions fail return the *same* ``State`` object, so
    ``new is old`` is a cheap "nothing happened" check.

See :mod:`surgiset.step` for the action reducer and :mod:`surgiset.store`
for the container that owns the current snapshot.
"""

from dataclasses import dataclass, field
from typing import Any
from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PVector

from surgiset.components import Instrument, InstrumentSet


@dataclass(frozen=True)
class State:
    """Immutable inventory/set snapshot.

    Attributes:
        inventory (PVector[Instrument]): Instrument rows in display order.
        sets (PVector[InstrumentSet]): Sets in display order.
    """

    inventory: PVector[Instrument] = field(default_factory=pvector)
    sets: PVector[InstrumentSet] = field(default_factory=pvector)

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse summary of the snapshot for diagnostics.

        Returns:
            PMap[str, Any]: Row counts plus the number of allocated units,
            omitting zero values.
        """
        description: PMap[str, Any] = pmap()
        counts = {
            "inventory": len(self.inventory),
            "sets": len(self.sets),
            "allocated": sum(si.quantity for s in self.sets for si in s.instruments),
        }
        for key, value in counts.items():
            if value:
                description = description.set(key, value)
        return description
