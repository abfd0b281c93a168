"""String helpers: hashing, truncation and random strings."""

from __future__ import annotations

import hashlib
import random

_LETTERS = "abcdefghijklmnopqrstuvwxyz1234567890"


def md5_hash(text: str) -> str:
    """Return the hex MD5 digest of the UTF-8 encoded text."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def truncate(s: str, n: int) -> str:
    """Return at most the first n characters of s."""
    if n < 0:
        raise ValueError(f"truncate length must not be negative: {n}")
    return s[:n]


def random_string(n: int) -> str:
    """Return a random string of length n drawn from [a-z0-9]."""
    if n < 0:
        raise ValueError(f"length must not be negative: {n}")
    return "".join(random.choices(_LETTERS, k=n))