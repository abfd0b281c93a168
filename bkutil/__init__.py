"""Utilities for services: caching, conversion, encryption, error wrapping, sets and logging."""

__version__ = "0.1.0"

__all__ = [
    "aes_gcm",
    "conv",
    "errorx",
    "keys",
    "log_adapter",
    "loggers",
    "memory_backend",
    "memory_cache",
    "sets",
    "stringx",
]