"""Helper operations for reordering playlist tracks."""

from __future__ import annotations

from typing import List, TypeVar

T = TypeVar("T")


def move_items(items: List[T], selected_indices: List[int], delta: int) -> List[int]:
    """Move selected items within a list by ``delta`` positions.

    Returns the new indices of the moved items in the same order as ``selected_indices``.
    Raises ``ValueError`` when the move would go out of bounds or the selection is empty.
    """

    if not selected_indices:
        raise ValueError("Selection required")
    if delta == 0:
        return list(selected_indices)

    count = len(items)
    unique_indices = sorted(set(selected_indices))
    if any(index < 0 or index >= count for index in unique_indices):
        raise ValueError("Indices out of range")

    step = 1 if delta > 0 else -1
    current_indices = unique_indices[:]

    for _ in range(abs(delta)):
        if step < 0 and current_indices[0] + step < 0:
            raise ValueError("Cannot move beyond start")
        if step > 0 and current_indices[-1] + step >= count:
            raise ValueError("Cannot move beyond end")
        ordered = current_indices if step < 0 else reversed(current_indices)
        for index in ordered:
            items[index + step], items[index] = items[index], items[index + step]
        current_indices = [index + step for index in current_indices]

    index_map = {original: new for original, new in zip(unique_indices, current_indices)}
    return [index_map[index] for index in selected_indices]


def swap_items(items: List[T], first: int, second: int) -> bool:
    """Swap two items in place; out-of-range indices leave the list untouched."""

    count = len(items)
    if not (0 <= first < count and 0 <= second < count):
        return False
    items[first], items[second] = items[second], items[first]
    return True
