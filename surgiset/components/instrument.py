"""Instrument component.

One ``Instrument`` row tracks a single physical unit. ``quantity`` is the
number of units currently on the shelf (not allocated to any set); after
creation it is 1, and allocation moves it down to 0 and back.
"""

from dataclasses import dataclass
from typing import Optional

from surgiset.types import InstrumentID


@dataclass(frozen=True)
class Instrument:
    """Inventory entry.

    Attributes:
        id: Opaque identifier, immutable after creation.
        name: Display name.
        description: Free text, may be empty.
        quantity: Units currently unallocated.
        image: Optional file path or ``data:`` URI produced by the image service.
        is_wishlist: Marks a not-yet-purchased entry. Does not affect quantity.
    """

    id: InstrumentID
    name: str
    description: str = ""
    quantity: int = 1
    image: Optional[str] = None
    is_wishlist: bool = False


@dataclass(frozen=True)
class InstrumentDraft:
    """Authoring-time description of instruments to add.

    ``quantity`` is the number of independent rows to create; ``0`` or a
    missing value still creates one row.
    """

    name: str
    description: str = ""
    quantity: int = 1
    image: Optional[str] = None
    is_wishlist: bool = False
