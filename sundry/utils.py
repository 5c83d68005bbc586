"""
Sundry utilities shared across the package.

Small value helpers: blank/filled checks, callback plumbing and conditional raising.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import sys

from collections.abc import Sized
from types import SimpleNamespace
from typing import Any, Callable


# Methods --------------------------------------------------------------------------------------------------------------

def blank(value: Any) -> bool:
    """
    Determine if a value is "blank": None, a whitespace-only string or an empty container.

    Numbers and booleans are never blank, including 0 and False.

    Examples:
        >>> blank("  "), blank([]), blank(0), blank(False)
        (True, True, False, False)
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (bool, int, float, complex)):
        return False
    if isinstance(value, Sized):
        return len(value) == 0
    return not value


def filled(value: Any) -> bool:
    return not blank(value)


def class_basename(obj: Any) -> str:
    """
    Get the class name of an object or a class, without its module.

    Dotted names given as strings are reduced to their last part.

    Examples:
        >>> class_basename(10)
        'int'
        >>> class_basename("sundry.fluent.Fluent")
        'Fluent'
    """
    if isinstance(obj, str):
        return obj.replace("\\", ".").rsplit(".", 1)[-1]

    cls = obj if isinstance(obj, type) else obj.__class__
    return cls.__name__


def literal(*args: Any, **kwargs: Any) -> Any:
    """
    Return a new anonymous object holding the given keyword arguments as attributes.

    A single positional argument is returned as is.

    Examples:
        >>> literal(name="Ada", age=36).name
        'Ada'
    """
    if len(args) == 1 and not kwargs:
        return args[0]
    if args:
        raise TypeError("literal() takes keyword arguments or a single positional argument")
    return SimpleNamespace(**kwargs)


def transform(value: Any, callback: Callable[[Any], Any], default: Any = None) -> Any:
    """
    Apply callback to value when it is filled, otherwise return default.

    A callable default receives the blank value.

    Examples:
        >>> transform(5, lambda v: v * 2)
        10
        >>> transform("", len, default="none")
        'none'
    """
    if filled(value):
        return callback(value)
    if callable(default):
        return default(value)
    return default


def with_(value: Any, callback: Callable[[Any], Any] | None = None) -> Any:
    """Return value, passed through callback when one is given."""
    return value if callback is None else callback(value)


def throw_if(condition: Any, exception: BaseException | type[BaseException] | str = RuntimeError, *args: Any) -> Any:
    """
    Raise exception when condition is truthy, otherwise return condition.

    Args:
        condition: The value tested for truthiness.
        exception: An exception instance, an exception class instantiated with args, or a message
            for a RuntimeError.
        *args: Arguments for the exception class.

    Raises:
        BaseException: The given exception when condition is truthy.

    Examples:
        >>> throw_if(False, ValueError, "boom")
        False
    """
    if condition:
        if isinstance(exception, str):
            raise RuntimeError(exception)
        if isinstance(exception, type) and issubclass(exception, BaseException):
            raise exception(*args)
        raise exception
    return condition


def throw_unless(condition: Any, exception: BaseException | type[BaseException] | str = RuntimeError,
                 *args: Any) -> Any:
    """Raise exception unless condition is truthy; return condition."""
    throw_if(not condition, exception, *args)
    return condition


def windows_os() -> bool:
    return sys.platform.startswith("win")
