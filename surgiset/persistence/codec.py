"""JSON document codec for store state.

The persisted document mirrors the original app's layout::

    {"state": {"inventory": [...], "sets": [...]}, "version": 0}

Field names inside rows are camelCase (``isWishlist``, ``instrumentId``).
Decoding is lenient about optional fields so documents written by older
versions still load; structurally invalid documents raise
:class:`DocumentError`.
"""

import json
from typing import Any, Dict, List, Mapping

from pyrsistent import pvector

from surgiset.components import Instrument, InstrumentSet, SetInstrument
from surgiset.state import State
from surgiset.types import DEFAULT_SET_ICON

DOCUMENT_VERSION = 0


class DocumentError(ValueError):
    """A persisted document is not a valid store state."""


def instrument_to_dict(instrument: Instrument) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": instrument.id,
        "name": instrument.name,
        "description": instrument.description,
        "quantity": instrument.quantity,
        "isWishlist": instrument.is_wishlist,
    }
    if instrument.image is not None:
        data["image"] = instrument.image
    return data


def set_to_dict(instrument_set: InstrumentSet) -> Dict[str, Any]:
    return {
        "id": instrument_set.id,
        "name": instrument_set.name,
        "description": instrument_set.description,
        "icon": instrument_set.icon,
        "instruments": [
            {"instrumentId": si.instrument_id, "quantity": si.quantity}
            for si in instrument_set.instruments
        ],
    }


def state_to_document(state: State) -> Dict[str, Any]:
    return {
        "state": {
            "inventory": [instrument_to_dict(i) for i in state.inventory],
            "sets": [set_to_dict(s) for s in state.sets],
        },
        "version": DOCUMENT_VERSION,
    }


def _require(row: Mapping[str, Any], key: str, kind: type, where: str) -> Any:
    value = row.get(key)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DocumentError(f"{where}: {key!r} must be {kind.__name__}")
    return value


def instrument_from_dict(row: Mapping[str, Any]) -> Instrument:
    quantity = _require(row, "quantity", int, "instrument")
    if quantity < 0:
        raise DocumentError("instrument: 'quantity' must be non-negative")
    image = row.get("image")
    return Instrument(
        id=_require(row, "id", str, "instrument"),
        name=_require(row, "name", str, "instrument"),
        description=row.get("description") or "",
        quantity=quantity,
        image=image if isinstance(image, str) and image else None,
        is_wishlist=bool(row.get("isWishlist", False)),
    )


def set_instrument_from_dict(row: Mapping[str, Any]) -> SetInstrument:
    quantity = _require(row, "quantity", int, "set instrument")
    if quantity <= 0:
        raise DocumentError("set instrument: 'quantity' must be positive")
    return SetInstrument(
        instrument_id=_require(row, "instrumentId", str, "set instrument"),
        quantity=quantity,
    )


def set_from_dict(row: Mapping[str, Any]) -> InstrumentSet:
    instruments: List[SetInstrument] = []
    seen: set[str] = set()
    raw_instruments = row.get("instruments", [])
    if not isinstance(raw_instruments, list):
        raise DocumentError("set: 'instruments' must be an array")
    for item in raw_instruments:
        if not isinstance(item, Mapping):
            raise DocumentError("set: 'instruments' rows must be objects")
        allocation = set_instrument_from_dict(item)
        if allocation.instrument_id in seen:
            raise DocumentError(
                f"set: instrument {allocation.instrument_id!r} listed twice"
            )
        seen.add(allocation.instrument_id)
        instruments.append(allocation)
    return InstrumentSet(
        id=_require(row, "id", str, "set"),
        name=_require(row, "name", str, "set"),
        description=row.get("description") or "",
        icon=row.get("icon") or DEFAULT_SET_ICON.value,
        instruments=pvector(instruments),
    )


def state_from_document(document: Any) -> State:
    if not isinstance(document, Mapping):
        raise DocumentError("document must be an object")
    body = document.get("state", document)
    if not isinstance(body, Mapping):
        raise DocumentError("'state' must be an object")
    inventory = body.get("inventory", [])
    sets = body.get("sets", [])
    if not isinstance(inventory, list) or not isinstance(sets, list):
        raise DocumentError("'inventory' and 'sets' must be arrays")
    for row in [*inventory, *sets]:
        if not isinstance(row, Mapping):
            raise DocumentError("rows must be objects")
    return State(
        inventory=pvector(instrument_from_dict(r) for r in inventory),
        sets=pvector(set_from_dict(r) for r in sets),
    )


def dumps_state(state: State) -> str:
    return json.dumps(state_to_document(state), ensure_ascii=False)


def loads_state(blob: str) -> State:
    try:
        document = json.loads(blob)
    except json.JSONDecodeError as e:
        raise DocumentError(f"invalid JSON: {e}") from e
    return state_from_document(document)
