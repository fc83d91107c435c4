"""Identifier generation.

Instruments and sets are keyed by short opaque strings (9 lowercase base36
characters). IDs are never recycled and carry no ordering; persisted
documents keep them verbatim, so any string is a valid ID when loading.

Examples
--------
>>> from surgiset.entity import new_entity_id, new_entity_ids
>>> iid = new_entity_id()
>>> a, b, c = new_entity_ids(3)
"""

import secrets
import string
from typing import List

ID_LENGTH = 9
_ALPHABET = string.digits + string.ascii_lowercase


def new_entity_id() -> str:
    """Return a newly generated opaque ID."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(ID_LENGTH))


def new_entity_ids(n: int) -> List[str]:
    """Return ``n`` distinct fresh IDs as a list."""
    ids: List[str] = []
    seen: set[str] = set()
    while len(ids) < n:
        eid = new_entity_id()
        if eid not in seen:
            seen.add(eid)
            ids.append(eid)
    return ids
