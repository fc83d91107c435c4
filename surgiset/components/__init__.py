"""surgiset.components
=======================

Immutable value objects stored in :class:`surgiset.state.State`::

    from surgiset.components import Instrument, InstrumentSet, SetInstrument

Components carry no behavior; systems in :mod:`surgiset.systems` build new
instances to express change.
"""

from .instrument import Instrument, InstrumentDraft
from .instrument_set import InstrumentSet
from .set_instrument import SetInstrument

__all__ = [
    "Instrument",
    "InstrumentDraft",
    "InstrumentSet",
    "SetInstrument",
]
