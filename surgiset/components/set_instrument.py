from dataclasses import dataclass

from surgiset.types import InstrumentID


@dataclass(frozen=True)
class SetInstrument:
    """Allocation of ``quantity`` units of an instrument to a set.

    ``instrument_id`` is a reference, not ownership; the instrument row may
    disappear while the allocation still points at it (see
    :func:`surgiset.utils.lookup.instrument_for_display`).
    """

    instrument_id: InstrumentID
    quantity: int
