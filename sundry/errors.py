"""
Sundry Errors raised by parameter bags, filters and driver managers
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Sequence

__all__ = [
    "ParameterError",
    "UnexpectedValueError",
    "ParameterNotFoundError",
    "InvalidFilterError",
    "InvalidEnumValueError",
    "CircularReferenceError",
    "DriverError",
]


# Classes --------------------------------------------------------------------------------------------------------------

class ParameterError(ValueError):
    """Base error for parameter bag failures."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.key = key


class UnexpectedValueError(ParameterError):
    """Raised when a stored value does not match the requested type or fails a filter."""


class ParameterNotFoundError(ParameterError):
    """Raised when a placeholder references a parameter that does not exist."""


class InvalidFilterError(ParameterError):
    """Raised when a filter is invoked with an incompatible kind/options combination."""


class InvalidEnumValueError(UnexpectedValueError):
    """Raised when a scalar has no matching case in the requested enum."""

    def __init__(self, message: str, *, key: str | None = None, enum_class: type | None = None) -> None:
        super().__init__(message, key=key)
        self.enum_class = enum_class


class CircularReferenceError(ParameterError):
    """Raised when placeholder resolution revisits a key it is already resolving."""

    def __init__(self, key: str, path: Sequence[str]) -> None:
        self.path = list(path)
        super().__init__(f"circular reference detected for parameter '{key}' ({' -> '.join(self.path)})", key=key)


class DriverError(RuntimeError):
    """Raised by driver managers and drivers."""

    def __init__(self, message: str, *, driver: Any = None) -> None:
        super().__init__(message)
        self.driver = driver
