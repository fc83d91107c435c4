"""Positional move helper shared by the reorder systems."""

from typing import List, TypeVar
from pyrsistent import pvector
from pyrsistent.typing import PVector

T = TypeVar("T")


def move_item(items: PVector[T], from_index: int, to_index: int) -> PVector[T]:
    """Return ``items`` with the element at ``from_index`` moved to ``to_index``.

    The element is removed first and then inserted with ``list.insert``
    semantics, so a ``to_index`` past the end appends and negative indices
    count from the end. If ``from_index`` does not address an element the
    original vector is returned unchanged.
    """
    if not -len(items) <= from_index < len(items):
        return items
    buffer: List[T] = list(items)
    moved = buffer.pop(from_index)
    buffer.insert(to_index, moved)
    if buffer == list(items):
        return items
    return pvector(buffer)
