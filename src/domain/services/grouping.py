"""Group-by-key primitives shared by the reconciliation stages."""

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

ItemT = TypeVar("ItemT")
KeyT = TypeVar("KeyT", bound=Hashable)
OutT = TypeVar("OutT")


def group_by(
    items: Iterable[ItemT],
    key: Callable[[ItemT], KeyT | None],
) -> dict[KeyT, list[ItemT]]:
    """Group items by key, preserving first-seen key order.

    Items whose key is ``None`` are left out.

    Args:
        items: Items to group.
        key: Function returning the group key of an item.

    Returns:
        dict[KeyT, list[ItemT]]: Items per key, in input order.
    """
    groups: dict[KeyT, list[ItemT]] = {}
    for item in items:
        group_key = key(item)
        if group_key is None:
            continue
        groups.setdefault(group_key, []).append(item)
    return groups


def group_reduce(
    items: Iterable[ItemT],
    key: Callable[[ItemT], KeyT | None],
    reduce: Callable[[KeyT, list[ItemT]], OutT],
) -> dict[KeyT, OutT]:
    """Group items by key, then reduce each group to a single value."""
    return {
        group_key: reduce(group_key, members)
        for group_key, members in group_by(items, key).items()
    }


__all__ = ["group_by", "group_reduce"]
