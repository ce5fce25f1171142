"""Case-insensitive record with keyed and member-style access.

Provides CaseInsensitiveRecord, a mutable mapping from string keys to
arbitrary values where keys that differ only in letter case are the same
entry. Every entry can also be read and written as an attribute:

    >>> record = CaseInsensitiveRecord([("Id", 7), ("Name", "Ann")])
    >>> record["ID"], record.name
    (7, 'Ann')
    >>> record.email is None
    True
    >>> record.Email = "ann@example.com"
    >>> list(record)
    ['Id', 'Name', 'Email']

The casing used when a key is first inserted is the casing reported by
keys() and items(); later upserts with another casing only replace the value.
"""

from collections.abc import ItemsView, Iterator, Mapping, MutableMapping, ValuesView
from typing import Any, Iterable, Optional, Tuple, Union

from insensitive_records.custom_exceptions import (
    ConcurrentModificationError,
    DuplicateKeyError,
    KeyNotFoundError,
)

_INTERNAL_SLOTS = frozenset(("_store", "_version", "_snapshot_iteration"))


def normalize_key(key: str) -> str:
    """Fold the case of a key. Only strings are accepted as keys."""
    if not isinstance(key, str):
        raise TypeError(f"Record keys must be strings, not {type(key).__name__}")
    return key.casefold()


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


class RecordItemsView(ItemsView):
    def __iter__(self):
        return self._mapping._iter_entries()


class RecordValuesView(ValuesView):
    def __iter__(self):
        return (value for _, value in self._mapping._iter_entries())


class CaseInsensitiveRecord(MutableMapping):
    """Mapping with case-insensitive string keys and attribute access.

    Keyed access follows the usual mapping contract: ``record[key]`` raises
    KeyNotFoundError (a KeyError) for missing keys and ``record[key] = value``
    inserts or replaces. ``add`` is the strict insert and raises
    DuplicateKeyError if the key is present in any casing.

    Attribute access is permissive: reading a name that is not in the record
    returns None, writing any name stores it. Names that belong to the class
    itself (``keys``, ``add``, ...) resolve to the class member on read, so
    read such columns with ``record["keys"]``.

    Iteration fails fast with ConcurrentModificationError when entries are
    added or removed while iterating, unless the record was created with
    ``snapshot_iteration=True``, in which case iteration walks a copy taken
    when it starts. Replacing a value is never a structural change.

    Args:
        pairs: Optional mapping or iterable of (key, value) pairs to load.
            Loaded with strict insert, so case-insensitive duplicates raise.
        snapshot_iteration: Iterate over a snapshot instead of failing fast.
    """

    __slots__ = tuple(_INTERNAL_SLOTS)

    def __init__(
        self,
        pairs: Optional[Union[Mapping, Iterable[Tuple[str, Any]]]] = None,
        *,
        snapshot_iteration: bool = False,
    ) -> None:
        object.__setattr__(self, "_store", {})
        object.__setattr__(self, "_version", 0)
        object.__setattr__(self, "_snapshot_iteration", snapshot_iteration)
        if pairs is not None:
            if isinstance(pairs, Mapping):
                pairs = pairs.items()
            for key, value in pairs:
                self.add(key, value)

    # Keyed access

    def __getitem__(self, key: str) -> Any:
        entry = self._entry(key)
        if entry is None:
            raise KeyNotFoundError(key)
        return entry[1]

    def __setitem__(self, key: str, value: Any) -> None:
        normalized = normalize_key(key)
        entry = self._store.get(normalized)
        if entry is None:
            self._store[normalized] = (key, value)
            self._changed()
        else:
            self._store[normalized] = (entry[0], value)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def __contains__(self, key) -> bool:
        return self._entry(key) is not None

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[str]:
        return (stored_key for stored_key, _ in self._iter_entries())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"

    def __eq__(self, other) -> bool:
        # Keys compare without regard to case, values by ==
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(other) != len(self):
            return False
        for key, value in other.items():
            found, stored = self.try_get(key)
            if not found or not (stored is value or stored == value):
                return False
        return True

    __hash__ = None

    def items(self) -> RecordItemsView:
        return RecordItemsView(self)

    def values(self) -> RecordValuesView:
        return RecordValuesView(self)

    def add(self, key: str, value: Any) -> None:
        normalized = normalize_key(key)
        existing = self._store.get(normalized)
        if existing is not None:
            raise DuplicateKeyError(key, existing[0])
        self._store[normalized] = (key, value)
        self._changed()

    def remove(self, key: str) -> bool:
        """Remove the entry for key. Returns False if there was none."""
        if key not in self:
            return False
        del self._store[normalize_key(key)]
        self._changed()
        return True

    def try_get(self, key: str) -> Tuple[bool, Any]:
        """Look up key without raising.

        Returns:
            A (found, value) pair. value is None when found is False.
        """
        entry = self._entry(key)
        if entry is None:
            return False, None
        return True, entry[1]

    def contains_key(self, key: str) -> bool:
        return key in self

    def contains_entry(self, entry: Tuple[str, Any]) -> bool:
        """True if the key is present and its value equals the given value."""
        return entry in self.items()

    def add_entry(self, entry: Tuple[str, Any]) -> None:
        key, value = entry
        self.add(key, value)

    def remove_entry(self, entry: Tuple[str, Any]) -> bool:
        """Remove the entry only if both the key and the value match."""
        if not self.contains_entry(entry):
            return False
        return self.remove(entry[0])

    def clear(self) -> None:
        if self._store:
            self._store.clear()
            self._changed()

    def copy(self) -> "CaseInsensitiveRecord":
        return type(self)(
            list(self._store.values()), snapshot_iteration=self._snapshot_iteration
        )

    def to_dict(self) -> dict:
        return dict(self._store.values())

    @property
    def is_read_only(self) -> bool:
        return False

    # Member-style access

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails
        if name in _INTERNAL_SLOTS or _is_dunder(name):
            raise AttributeError(name)
        entry = self._entry(name)
        return None if entry is None else entry[1]

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        if not self.remove(name):
            raise AttributeError(name)

    def __dir__(self):
        member_names = {key for key in self if key.isidentifier()}
        return sorted(set(super().__dir__()) | member_names)

    def try_get_member(self, name: str) -> Tuple[bool, Any]:
        """Probe a member name. Returns (found, value) and never raises."""
        return self.try_get(name)

    # Copy and pickle support

    def __copy__(self):
        return self.copy()

    def __getstate__(self):
        return {
            "entries": list(self._store.values()),
            "snapshot_iteration": self._snapshot_iteration,
        }

    def __setstate__(self, state):
        CaseInsensitiveRecord.__init__(
            self, state["entries"], snapshot_iteration=state["snapshot_iteration"]
        )

    # Internals

    def _entry(self, key) -> Optional[Tuple[str, Any]]:
        if not isinstance(key, str):
            return None
        return self._store.get(key.casefold())

    def _changed(self) -> None:
        object.__setattr__(self, "_version", self._version + 1)

    def _iter_entries(self) -> Iterator[Tuple[str, Any]]:
        if self._snapshot_iteration:
            return iter(list(self._store.values()))
        return self._fail_fast_entries(self._version)

    def _fail_fast_entries(self, version: int) -> Iterator[Tuple[str, Any]]:
        if self._version != version:
            raise ConcurrentModificationError()
        for entry in self._store.values():
            yield entry
            if self._version != version:
                raise ConcurrentModificationError()
