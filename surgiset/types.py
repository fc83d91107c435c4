"""Common type aliases and enumerations.

``InstrumentID`` and ``SetID`` are opaque string identifiers generated by
:mod:`surgiset.entity`. ``SetIcon`` is the fixed icon vocabulary offered when
a set is created.
"""

from enum import StrEnum

InstrumentID = str
SetID = str
Namespace = str


class SetIcon(StrEnum):
    """Symbolic icon names a set may carry."""

    LAYERS = "layers"
    MEDKIT = "medkit"
    BANDAGE = "bandage"
    FLASK = "flask"
    FITNESS = "fitness"
    BASKET = "basket"
    CUBE = "cube"
    BRIEFCASE = "briefcase"
    CLIPBOARD = "clipboard"
    SHIELD_CHECKMARK = "shield-checkmark"
    HEART = "heart"
    THERMOMETER = "thermometer"
    PULSE = "pulse"
    MEDICAL = "medical"
    CONSTRUCT = "construct"


DEFAULT_SET_ICON = SetIcon.LAYERS
