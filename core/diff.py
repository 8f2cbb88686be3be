# core/diff.py
from typing import Any, List, Sequence, Tuple


def diff_items(
    previous: Sequence[Any], current: Sequence[Any]
) -> tuple[List[Any], List[Any], List[Tuple[Any, int, int]]]:
    """
    Compute added, removed, and quantity_changes between two item sequences.
    - items are matched on their `merge_key`
    - results keep the order of the sequence they come from
    Returns:
      (added_items, removed_items, quantity_changes[(item_after, before, after)])
    """
    old_map = {it.merge_key: it for it in previous}
    new_map = {it.merge_key: it for it in current}

    added = [it for it in current if it.merge_key not in old_map]
    removed = [it for it in previous if it.merge_key not in new_map]

    quantity_changes: List[Tuple[Any, int, int]] = []
    for it in current:
        old_item = old_map.get(it.merge_key)
        if old_item is None:
            continue
        # Wishlist entries carry no quantity
        before = getattr(old_item, "quantity", None)
        after = getattr(it, "quantity", None)
        if before != after:
            quantity_changes.append((it, before, after))

    return added, removed, quantity_changes


def summarize(
    added: List[Any], removed: List[Any], quantity_changes: List[Tuple[Any, int, int]]
) -> str:
    return (
        f"{len(added)} added · {len(removed)} removed · "
        f"{len(quantity_changes)} quantity changes"
    )
