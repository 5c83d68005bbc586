"""
Sundry Sentinels

MISSING marks an absent key or attribute during nested lookups, where None is a legitimate stored value.
Always compare with `is`.

Example:
    >>> found = arr.get(bag, "user.name", MISSING)
    >>> if found is MISSING:
    ...     found = load_name()
"""

from typing import Any

__all__ = [
    'MISSING',
    'MissingType',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for sentinel objects.

    Sentinels are falsy singletons optimized for identity checks.
    """
    _instance = None

    def __new__(cls) -> '_SentinelBase':
        """Ensures singleton behavior per sentinel type."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class MissingType(_SentinelBase):
    """Sentinel type for MISSING, an absent key or attribute."""
    _instance: 'MissingType | None' = None
    _name = "MISSING"


# Sentinel Instances ---------------------------------------------------------------------------------------------------

MISSING = MissingType()
