"""An error type that wraps another error with layer and function context.

Typical use::

    wrapf = new_layer_function_error_wrapf("ServiceLayer", "BulkDelete")
    try:
        manager.delete(ids)
    except Exception as exc:
        raise wrapf(exc, "manager.delete ids=`%s` fail", ids)
"""

from __future__ import annotations

from typing import Any, Callable, Optional


class Errorx(Exception):
    """An error carrying a formatted message and the error it wraps."""

    def __init__(self, message: str, err: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.err = err
        self.__cause__ = err

    def __str__(self) -> str:
        return self.message

    def matches(self, target: Optional[BaseException]) -> bool:
        """Report whether the wrapped error chain contains target."""
        if target is None or self.err is None:
            return self.err is target
        return is_error(self.err, target)

    def unwrap(self) -> Optional[BaseException]:
        """Return the wrapped error, unwrapping it once more if it wraps another."""
        inner = self.err
        if isinstance(inner, Errorx):
            return inner.unwrap()
        if inner is not None and inner.__cause__ is not None:
            return inner.__cause__
        return inner


def unwrap(err: Optional[BaseException]) -> Optional[BaseException]:
    """Return the error that err wraps, or None."""
    if err is None:
        return None
    if isinstance(err, Errorx):
        return err.unwrap()
    return err.__cause__


def is_error(err: Optional[BaseException], target: Optional[BaseException]) -> bool:
    """Report whether any error in err's chain matches target."""
    if target is None:
        return err is None
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        if err is target or err == target:
            return True
        if isinstance(err, Errorx) and err.matches(target):
            return True
        err = unwrap(err)
    return False


def _contains_errorx(err: Optional[BaseException]) -> bool:
    seen = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, Errorx):
            return True
        seen.add(id(err))
        err = unwrap(err)
    return False


def make_message(err: BaseException, layer: str, function: str, msg: str) -> str:
    """Build the message of a wrapping error."""
    if _contains_errorx(err):
        return f"[{layer}:{function}] {msg} => {err}"
    return f"[{layer}:{function}] {msg} => [Raw:Error] {err}"


def wrap(
    err: Optional[BaseException], layer: str, function: str, message: str
) -> Optional[Errorx]:
    """Wrap err with a message; None stays None."""
    if err is None:
        return None
    return Errorx(make_message(err, layer, function, message), err)


def wrapf(
    err: Optional[BaseException], layer: str, function: str, format: str, *args: Any
) -> Optional[Errorx]:
    """Wrap err with a %-formatted message; None stays None."""
    if err is None:
        return None
    msg = format % args if args else format
    return Errorx(make_message(err, layer, function, msg), err)


def new_layer_function_error_wrap(
    layer: str, function: str
) -> Callable[[Optional[BaseException], str], Optional[Errorx]]:
    """Return a wrap function bound to a layer and a function name."""

    def bound_wrap(err: Optional[BaseException], message: str) -> Optional[Errorx]:
        return wrap(err, layer, function, message)

    return bound_wrap


def new_layer_function_error_wrapf(
    layer: str, function: str
) -> Callable[..., Optional[Errorx]]:
    """Return a wrapf function bound to a layer and a function name."""

    def bound_wrapf(
        err: Optional[BaseException], format: str, *args: Any
    ) -> Optional[Errorx]:
        return wrapf(err, layer, function, format, *args)

    return bound_wrapf