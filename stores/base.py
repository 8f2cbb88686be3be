# stores/base.py
import dataclasses
import functools
import json
import sqlite3
from typing import Any, Callable, Dict, List, Optional, Tuple

from tenacity import RetryError

from core.diff import diff_items, summarize
from core.logger import get_logger
from core.storage import SqliteStorage

logger = get_logger(__name__)

Listener = Callable[["PersistedStore"], None]


def mutation(method):
    """
    Route a store method through the write-through commit step.

    The outermost decorated call snapshots the state first; once it returns,
    a changed state is saved, logged and announced to listeners before control
    goes back to the caller. Nested decorated calls commit with the outer one.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._depth:
            return method(self, *args, **kwargs)

        before = self.serialize()
        previous_items = [dataclasses.replace(it) for it in self._items]
        self._depth += 1
        try:
            result = method(self, *args, **kwargs)
        finally:
            self._depth -= 1
        self._commit(before, previous_items, method.__name__)
        return result

    return wrapper


class PersistedStore:
    """
    Ordered item sequence kept in memory and mirrored to a snapshot storage.

    Subclasses set `item_type` and may extend `serialize`/`deserialize` and
    `_reset` with extra state. All state changes go through `@mutation`
    methods.
    """

    item_type: Any = None

    def __init__(self, name: str, storage: SqliteStorage):
        self.name = name
        self._storage = storage
        self._items: List[Any] = []
        self._listeners: List[Listener] = []
        self._depth = 0
        self._reset()
        self.rehydrate()

    # -- state -------------------------------------------------------------

    def _reset(self) -> None:
        self._items = []

    @property
    def items(self) -> Tuple[Any, ...]:
        """Copies of the current items, in insertion order."""
        return tuple(dataclasses.replace(it) for it in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _find(self, key: str) -> Optional[int]:
        for idx, it in enumerate(self._items):
            if it.merge_key == key:
                return idx
        return None

    # -- persistence -------------------------------------------------------

    def serialize(self) -> Dict[str, Any]:
        return {"items": [it.to_dict() for it in self._items]}

    def deserialize(self, data: Dict[str, Any]) -> None:
        """Replace the in-memory state with a serialized snapshot."""
        raw_items = data.get("items", [])
        if not isinstance(raw_items, list):
            raise ValueError("'items' must be a list")

        items: List[Any] = []
        seen = set()
        for raw in raw_items:
            if not isinstance(raw, dict):
                raise ValueError(f"item record must be an object, got {type(raw).__name__}")
            it = self.item_type.from_dict(raw)
            if it.merge_key in seen:
                raise ValueError(f"duplicate key '{it.merge_key}'")
            seen.add(it.merge_key)
            items.append(it)
        self._items = items

    def rehydrate(self) -> None:
        """
        Load the persisted snapshot into memory. Missing or unreadable
        snapshots leave the store empty.
        """
        self._reset()
        try:
            data = self._storage.load(self.name)
        except (ValueError, sqlite3.Error, OSError) as e:
            logger.warning("Could not read snapshot '%s'; starting empty: %s", self.name, e)
            return

        if data is None:
            logger.debug("No snapshot for '%s'; starting empty.", self.name)
            return

        try:
            self.deserialize(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding malformed snapshot '%s': %s", self.name, e)
            self._reset()
            return

        logger.info("Rehydrated '%s' with %d items.", self.name, len(self._items))

    def _commit(self, before: Dict[str, Any], previous_items: List[Any], op: str) -> None:
        after = self.serialize()
        if after == before:
            logger.debug("%s.%s left state unchanged.", self.name, op)
            return

        try:
            self._storage.save(self.name, after)
        except RetryError as e:
            logger.error(
                "Failed to persist '%s' after %s: %s", self.name, op, e.last_attempt.exception()
            )
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to persist '%s' after %s: %s", self.name, op, e)

        added, removed, quantity_changes = diff_items(previous_items, self._items)
        logger.info(
            "%s.%s: %s", self.name, op, summarize(added, removed, quantity_changes)
        )
        self._notify()

    def dumps(self) -> str:
        return json.dumps(self.serialize(), sort_keys=True)

    # -- observation -------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(store)` after every committed change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Listener %r failed for '%s'.", listener, self.name)
