from typing import Iterable, Sequence, Tuple, TypedDict

from pyrsistent import pvector

from surgiset.components import Instrument, InstrumentSet, SetInstrument
from surgiset.state import State
from surgiset.types import InstrumentID, SetID


class AllocatedEntities(TypedDict):
    scalpel_id: InstrumentID
    forceps_id: InstrumentID
    retractor_id: InstrumentID
    rhino_id: SetID
    suture_id: SetID


def make_instrument(
    instrument_id: InstrumentID,
    name: str = "Instrument",
    quantity: int = 1,
    description: str = "",
    is_wishlist: bool = False,
) -> Instrument:
    return Instrument(
        id=instrument_id,
        name=name,
        description=description,
        quantity=quantity,
        is_wishlist=is_wishlist,
    )


def make_set(
    set_id: SetID,
    name: str = "Set",
    allocations: Iterable[Tuple[InstrumentID, int]] = (),
) -> InstrumentSet:
    return InstrumentSet(
        id=set_id,
        name=name,
        instruments=pvector(
            SetInstrument(instrument_id=iid, quantity=qty) for iid, qty in allocations
        ),
    )


def make_state(
    instruments: Sequence[Instrument] = (), sets: Sequence[InstrumentSet] = ()
) -> State:
    return State(inventory=pvector(instruments), sets=pvector(sets))


def make_allocated_state() -> tuple[State, AllocatedEntities]:
    """Three instruments and two sets, with the scalpel allocated to both sets.

    Shelf / allocations:
        scalpel:   shelf 1, rhino 2, suture 1
        forceps:   shelf 0, rhino 1
        retractor: shelf 1
    """
    entities = AllocatedEntities(
        scalpel_id="scalpel01",
        forceps_id="forceps01",
        retractor_id="retract01",
        rhino_id="rhinoset1",
        suture_id="suture001",
    )
    state = make_state(
        instruments=[
            make_instrument(entities["scalpel_id"], "Scalpel Handle No. 3", 1),
            make_instrument(entities["forceps_id"], "Adson Forceps", 0),
            make_instrument(entities["retractor_id"], "Senn Retractor", 1),
        ],
        sets=[
            make_set(
                entities["rhino_id"],
                "Rhinoplasty",
                [(entities["scalpel_id"], 2), (entities["forceps_id"], 1)],
            ),
            make_set(entities["suture_id"], "Basic Suturing", [(entities["scalpel_id"], 1)]),
        ],
    )
    return state, entities
