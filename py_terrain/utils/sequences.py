"""Sequence sampling helpers."""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def select_evenly(items: Sequence[T], limit: int) -> List[T]:
    """
    Pick at most ``limit`` items spread evenly across ``items``.

    Returns every item when there are no more than ``limit`` of them,
    otherwise the items at ``floor(i * len / limit)`` for i < limit.
    """
    if len(items) <= limit:
        return list(items)
    if limit <= 0:
        return []
    step = len(items) / limit
    return [items[int(i * step)] for i in range(limit)]
