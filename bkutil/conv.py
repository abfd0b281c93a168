"""Loose conversions of arbitrary values to integers, lists and strings."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, List

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class NotArrayError(TypeError):
    """Raised when a value that is not a sequence is given to to_slice."""

    def __init__(self, message: str = "only support array") -> None:
        super().__init__(message)


def _check_int64(result: int, original: Any) -> int:
    if not _INT64_MIN <= result <= _INT64_MAX:
        raise ValueError(f"unable to cast {original!r} to int64, value out of range")
    return result


def _parse_int64(text: str) -> int:
    def invalid() -> ValueError:
        return ValueError(f"unable to cast {text!r} to int64, invalid syntax")

    if not text or not text.isascii() or any(ch.isspace() for ch in text):
        raise invalid()
    negative = text[0] == "-"
    body = text[1:] if text[0] in "+-" else text
    if not body or body[0] in "+-":
        raise invalid()
    # a leading zero without a base letter means octal
    if len(body) > 1 and body[0] == "0" and body[1] not in "xXbBoO":
        body = "0o" + body[1:]
    try:
        magnitude = int(body, 0)
    except ValueError as exc:
        raise invalid() from exc
    return _check_int64(-magnitude if negative else magnitude, text)


def to_int64(value: Any) -> int:
    """Cast ints, floats, numeric strings and None to a 64-bit integer."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"unable to cast {value!r} to int64, unsupported type")
    if isinstance(value, int):
        return _check_int64(value, value)
    if isinstance(value, float):
        try:
            result = int(value)
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"unable to cast {value!r} to int64, {exc}") from exc
        return _check_int64(result, value)
    if isinstance(value, str):
        return _parse_int64(value)
    raise TypeError(f"unable to cast {value!r} to int64, unsupported type")


def to_slice(array: Any) -> List[Any]:
    """Return the items of a sequence as a list; strings and mappings are refused."""
    if isinstance(array, (str, Mapping)) or not isinstance(array, Sequence):
        raise NotArrayError()
    return list(array)


def string_to_bytes(s: str) -> bytes:
    """Encode a string to bytes; the inverse of bytes_to_string."""
    return s.encode("utf-8", errors="surrogateescape")


def bytes_to_string(b: bytes) -> str:
    """Decode bytes to a string without losing bytes that are not UTF-8."""
    return bytes(b).decode("utf-8", errors="surrogateescape")


def _format_float(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    return format(Decimal(repr(x)).normalize(), "f")


def to_string(value: Any) -> str:
    """Render any value as a string."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes_to_string(bytes(value))
    if value is None:
        return ""
    return str(value)