"""
Sundry Random Generator Tools - random strings, passwords, UUIDs and ULIDs

Every generator can be overridden for tests through the create_*_using() functions, and restored with
create_*_normally(). Overrides are held by the module-level `factories` object.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import base64
import logging
import secrets
import string
import time

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Callable
from uuid import UUID, uuid4

# Third-party ----------------------------------------------------------------------------------------------------------
from ulid import ULID

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class RandomConf:
    """Defaults for random generators."""
    # @formatter:off
    RANDOM_LENGTH: int = 16
    PASSWORD_LENGTH: int = 32
    LETTERS: str = string.ascii_letters
    NUMBERS: str = string.digits
    SYMBOLS: str = "~!#$%^&*()-_.,<>?/\\{}[]|:;"
    SPACES: str = " "
    # @formatter:on


class Factories:
    """Generator overrides; None means the normal generator is used."""

    def __init__(self) -> None:
        self.random_string: Callable[[int], str] | None = None
        self.uuid: Callable[[], UUID] | None = None
        self.ulid: Callable[[], ULID] | None = None

    def reset(self) -> None:
        self.random_string = self.uuid = self.ulid = None


factories = Factories()


# Methods --------------------------------------------------------------------------------------------------------------

def random_string(length: int | None = None) -> str:
    """
    Generate a random alpha-numeric string from a cryptographically secure source.

    Examples:
        >>> len(random_string(40))
        40
    """
    length = RandomConf.RANDOM_LENGTH if length is None else length
    if factories.random_string is not None:
        return factories.random_string(length)
    return _random_string(length)


def create_random_strings_using(factory: Callable[[int], str] | None = None) -> None:
    """Generate random strings with factory(length) until reset."""
    logger.debug("random string factory set to %r", factory)
    factories.random_string = factory


def create_random_strings_using_sequence(sequence: Sequence[str] | Mapping[int, str],
                                         when_missing: Callable[[int], str] | None = None) -> None:
    """
    Return the given strings in order from subsequent random_string() calls.

    Once the sequence is exhausted, when_missing(length) is used, a real random string by default.
    """
    values = dict(sequence) if isinstance(sequence, Mapping) else dict(enumerate(sequence))
    when_missing = when_missing or _random_string
    next_index = 0

    def factory(length: int) -> str:
        nonlocal next_index
        value = values[next_index] if next_index in values else when_missing(length)
        next_index += 1
        return value

    create_random_strings_using(factory)


def create_random_strings_normally() -> None:
    create_random_strings_using(None)


def password(length: int | None = None,
             letters: bool = True,
             numbers: bool = True,
             symbols: bool = True,
             spaces: bool = False) -> str:
    """
    Generate a random, secure password.

    The result holds at least one character of every enabled pool.

    Raises:
        ValueError: If no character pool is enabled, or length is shorter than the number of pools.
    """
    length = RandomConf.PASSWORD_LENGTH if length is None else length
    pools = [pool for enabled, pool in ((letters, RandomConf.LETTERS),
                                        (numbers, RandomConf.NUMBERS),
                                        (symbols, RandomConf.SYMBOLS),
                                        (spaces, RandomConf.SPACES)) if enabled]
    if not pools:
        raise ValueError("at least one character pool must be enabled")
    if length < len(pools):
        raise ValueError(f"length must be at least {len(pools)} to hold every enabled pool, got {length}")

    rng = secrets.SystemRandom()
    characters = [rng.choice(pool) for pool in pools]
    alphabet = "".join(pools)
    characters += [rng.choice(alphabet) for _ in range(length - len(characters))]
    rng.shuffle(characters)
    return "".join(characters)


def uuid() -> UUID:
    """Generate a random (version 4) UUID."""
    if factories.uuid is not None:
        return factories.uuid()
    return uuid4()


def ordered_uuid() -> UUID:
    """
    Generate a time-ordered UUID using the version 7 layout: 48 bits of Unix milliseconds
    followed by random bits, so values sort by creation time.
    """
    if factories.uuid is not None:
        return factories.uuid()
    return _uuid7()


def create_uuids_using(factory: Callable[[], UUID] | None = None) -> None:
    logger.debug("uuid factory set to %r", factory)
    factories.uuid = factory


def create_uuids_using_sequence(sequence: Sequence[UUID] | Mapping[int, UUID],
                                when_missing: Callable[[], UUID] | None = None) -> None:
    """Return the given UUIDs in order, then fall back to when_missing() (a random UUID by default)."""
    values = dict(sequence) if isinstance(sequence, Mapping) else dict(enumerate(sequence))
    when_missing = when_missing or uuid4
    next_index = 0

    def factory() -> UUID:
        nonlocal next_index
        value = values[next_index] if next_index in values else when_missing()
        next_index += 1
        return value

    create_uuids_using(factory)


def freeze_uuids(callback: Callable[[UUID], Any] | None = None) -> UUID:
    """
    Make uuid() always return the same value.

    With a callback, the freeze only lasts for callback(value).
    """
    value = uuid()
    create_uuids_using(lambda: value)

    if callback is not None:
        try:
            callback(value)
        finally:
            create_uuids_normally()

    return value


def create_uuids_normally() -> None:
    create_uuids_using(None)


def ulid(moment: datetime | None = None) -> ULID:
    """Generate a ULID, for the current time or the given moment."""
    if factories.ulid is not None:
        return factories.ulid()
    if moment is None:
        return ULID()
    if not isinstance(moment, datetime):
        raise TypeError(f"moment must be a datetime, got {fmt_type(moment)}")
    return ULID.from_datetime(moment)


def create_ulids_using(factory: Callable[[], ULID] | None = None) -> None:
    logger.debug("ulid factory set to %r", factory)
    factories.ulid = factory


def create_ulids_using_sequence(sequence: Sequence[ULID] | Mapping[int, ULID],
                                when_missing: Callable[[], ULID] | None = None) -> None:
    """Return the given ULIDs in order, then fall back to when_missing() (a fresh ULID by default)."""
    values = dict(sequence) if isinstance(sequence, Mapping) else dict(enumerate(sequence))
    when_missing = when_missing or ULID
    next_index = 0

    def factory() -> ULID:
        nonlocal next_index
        value = values[next_index] if next_index in values else when_missing()
        next_index += 1
        return value

    create_ulids_using(factory)


def freeze_ulids(callback: Callable[[ULID], Any] | None = None) -> ULID:
    """Make ulid() always return the same value, for the duration of callback when given."""
    value = ulid()
    create_ulids_using(lambda: value)

    if callback is not None:
        try:
            callback(value)
        finally:
            create_ulids_normally()

    return value


def create_ulids_normally() -> None:
    create_ulids_using(None)


# Private Methods ------------------------------------------------------------------------------------------------------

def _random_string(length: int) -> str:
    result = ""
    while len(result) < length:
        size = length - len(result)
        chunk = base64.b64encode(secrets.token_bytes(size)).decode("ascii")
        result += chunk.replace("/", "").replace("+", "").replace("=", "")[:size]
    return result


def _uuid7() -> UUID:
    millis = time.time_ns() // 1_000_000
    value = (millis & ((1 << 48) - 1)) << 80 | int.from_bytes(secrets.token_bytes(10), "big")
    value = (value & ~(0xF << 76)) | (0x7 << 76)
    value = (value & ~(0x3 << 62)) | (0x2 << 62)
    return UUID(int=value)
