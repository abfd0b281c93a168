"""Insertion-ordered sets of 64-bit integers and of strings."""

from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, List, TypeVar

_T = TypeVar("_T")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class _KeySet(Generic[_T]):
    """Shared container behaviour; the set operations live on the subclasses."""

    def __init__(self, values: Iterable[_T] = ()) -> None:
        self.data: Dict[_T, None] = {}
        for value in values:
            self.add(value)  # type: ignore[attr-defined]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[_T]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.data.keys() == other.data.keys()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.data)!r})"


class Int64Set(_KeySet[int]):
    """A set of signed 64-bit integers."""

    def has(self, key: int) -> bool:
        """Return True if the set contains key."""
        return key in self.data

    def add(self, key: int) -> None:
        """Add one key."""
        if isinstance(key, bool) or not isinstance(key, int):
            raise TypeError(f"Int64Set holds ints, got {type(key).__name__}")
        if not _INT64_MIN <= key <= _INT64_MAX:
            raise ValueError(f"{key} is out of the int64 range")
        self.data[key] = None

    def append(self, *args: int) -> None:
        """Add several keys."""
        for key in args:
            self.add(key)

    def size(self) -> int:
        """Return the number of keys."""
        return len(self.data)

    def to_list(self) -> List[int]:
        """Return the keys in insertion order."""
        return list(self.data)


class StringSet(_KeySet[str]):
    """A set of strings."""

    def has(self, key: str) -> bool:
        """Return True if the set contains key."""
        return key in self.data

    def add(self, key: str) -> None:
        """Add one key."""
        if not isinstance(key, str):
            raise TypeError(f"StringSet holds strings, got {type(key).__name__}")
        self.data[key] = None

    def append(self, *args: str) -> None:
        """Add several keys."""
        for key in args:
            self.add(key)

    def size(self) -> int:
        """Return the number of keys."""
        return len(self.data)

    def to_list(self) -> List[str]:
        """Return the keys in insertion order."""
        return list(self.data)

    def to_string(self, sep: str) -> str:
        """Join the keys with sep."""
        return sep.join(self.data)

    def diff(self, other: "StringSet") -> "StringSet":
        """Return the keys of this set that are not in other."""
        return StringSet(key for key in self.data if not other.has(key))


def split_string_to_set(s: str, sep: str) -> StringSet:
    """Split s on sep into a StringSet; an empty string gives an empty set."""
    if s == "":
        return StringSet()
    parts = list(s) if sep == "" else s.split(sep)
    return StringSet(parts)