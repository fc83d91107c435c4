"""Starter state for a first launch.

A fresh install shows two example sets so the sets screen is not empty.
Their ids are fixed (``"1"`` and ``"2"``) and never collide with generated
ids, which are nine characters long.
"""

from pyrsistent import pvector

from surgiset.components import InstrumentSet
from surgiset.state import State


def starter_state() -> State:
    return State(
        sets=pvector(
            [
                InstrumentSet(
                    id="1",
                    name="Rhinoplasty Set 1",
                    description="Standard open rhino set",
                ),
                InstrumentSet(
                    id="2",
                    name="Basic Suturing",
                    description="For minor lacerations",
                ),
            ]
        )
    )
