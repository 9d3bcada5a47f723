"""
Identity-keyed collections and the merge that keeps them in step with the
server without replacing objects callers already hold.
"""

from __future__ import annotations

import logging
from typing import (
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    TypeVar,
)

from .errors import DuplicateResourceError, NotFoundError

log = logging.getLogger("openshift_mcp.core.reconcile")


class Reconcilable(Protocol):
    @property
    def identity_key(self) -> str: ...

    def update_from(self, other: "Reconcilable") -> None: ...


T = TypeVar("T", bound=Reconcilable)


class ResourceCollection(Generic[T]):
    """
    Insertion-ordered set of resources keyed by identity.
    An 'unsupported' collection is permanently empty: the parent does not
    advertise the list operation.
    """

    def __init__(
        self, items: Iterable[T] = (), *, kind: str = "resource", unsupported: bool = False
    ):
        self.kind = kind
        self.unsupported = unsupported
        self._items: Dict[str, T] = {}
        for item in items:
            self.add(item)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._items
        key = getattr(item, "identity_key", None)
        return key is not None and self._items.get(key) is item

    def __repr__(self) -> str:
        return f"ResourceCollection({self.kind}, {list(self._items)})"

    def keys(self) -> List[str]:
        return list(self._items)

    def get(self, key: str) -> Optional[T]:
        return self._items.get(key)

    def add(self, item: T) -> T:
        key = item.identity_key
        if key in self._items:
            raise DuplicateResourceError(self.kind, key)
        self._items[key] = item
        return item

    def remove(self, key: str) -> T:
        try:
            return self._items.pop(key)
        except KeyError:
            raise NotFoundError(self.kind, key) from None


def reconcile(old: ResourceCollection[T], fresh: Iterable[T]) -> ResourceCollection[T]:
    """
    Merge freshly fetched items into a collection.
    - Known keys keep the old object; its attributes are overwritten in place
    - Unknown keys insert the fresh object
    - Old keys absent from `fresh` are dropped
    - Order follows `fresh`; a key repeated in `fresh` keeps its first
      position and its last attributes
    """
    result: ResourceCollection[T] = ResourceCollection(kind=old.kind)
    reused = inserted = 0

    for item in fresh:
        key = item.identity_key
        current = result.get(key)
        if current is not None:
            current.update_from(item)
            continue

        existing = old.get(key)
        if existing is not None:
            existing.update_from(item)
            result.add(existing)
            reused += 1
        else:
            result.add(item)
            inserted += 1

    log.debug(
        "reconciled %s: reused=%d inserted=%d dropped=%d",
        old.kind,
        reused,
        inserted,
        len([k for k in old.keys() if k not in result]),
    )
    return result


__all__ = ["Reconcilable", "ResourceCollection", "reconcile"]
