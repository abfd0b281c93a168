"""Cache keys: small value objects that render themselves as a string key."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


class Key(ABC):
    """Anything that can be used as the key of a cache entry."""

    @abstractmethod
    def key(self) -> str:
        """Return the string form of the key."""


@dataclass(frozen=True)
class StringKey(Key):
    """A key made of a string."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"StringKey needs a str, got {type(self.value).__name__}")

    def key(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntKey(Key):
    """A key made of an integer."""

    value: int

    _bounds: ClassVar[Tuple[Optional[int], Optional[int]]] = (None, None)

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"{type(self).__name__} needs an int, got {type(self.value).__name__}"
            )
        low, high = self._bounds
        if (low is not None and self.value < low) or (
            high is not None and self.value > high
        ):
            raise ValueError(f"{self.value} is out of range for {type(self).__name__}")

    def key(self) -> str:
        return str(self.value)


class Int64Key(IntKey):
    """A key made of a signed 64-bit integer."""

    _bounds = (_INT64_MIN, _INT64_MAX)


class UintKey(IntKey):
    """A key made of a non-negative integer."""

    _bounds = (0, None)

    def key(self) -> str:
        return str(self.value)


class Uint64Key(UintKey):
    """A key made of an unsigned 64-bit integer."""

    _bounds = (0, _UINT64_MAX)