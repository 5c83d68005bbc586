"""
Sundry Dates - a datetime with a controllable clock, and a configurable date factory

DateTime.now() and its relatives honour a process-wide "test now" moment, so code that asks the clock
for the time can be tested with a frozen clock. The module-level `date_factory` decides which class
(or callable, or factory object) builds dates for code that goes through it.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, ClassVar
from uuid import UUID

# Third-party ----------------------------------------------------------------------------------------------------------
from dateutil import parser as date_parser
from ulid import ULID

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import Conditionable
from .formatters import fmt_type, fmt_value

logger = logging.getLogger(__name__)

_GREGORIAN_EPOCH = datetime(1582, 10, 15, tzinfo=timezone.utc)
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# Classes --------------------------------------------------------------------------------------------------------------

class DateTime(datetime, Conditionable):
    """
    A datetime whose clock can be frozen for tests.

    Examples:
        >>> DateTime.set_test_now(datetime(2024, 4, 7, 12, 30))
        >>> DateTime.now()
        DateTime(2024, 4, 7, 12, 30)
        >>> DateTime.tomorrow()
        DateTime(2024, 4, 8, 0, 0)
        >>> DateTime.set_test_now()
    """

    _test_now: ClassVar[datetime | Callable[[], datetime] | None] = None

    # ----- Test clock -----

    @classmethod
    def set_test_now(cls, test_now: datetime | str | Callable[[], datetime] | None = None) -> None:
        """
        Freeze the clock at test_now for every DateTime class; None restores the real clock.

        A string is parsed first, a callable is invoked on every read of the clock.
        """
        if isinstance(test_now, str):
            test_now = cls.parse(test_now)
        elif test_now is not None and not isinstance(test_now, datetime) and not callable(test_now):
            raise TypeError(f"test now must be a datetime, str or callable, got {fmt_type(test_now)}")

        DateTime._test_now = test_now
        logger.debug("test now set to %r", test_now)

    @classmethod
    def has_test_now(cls) -> bool:
        return DateTime._test_now is not None

    @classmethod
    def get_test_now(cls) -> datetime | None:
        test_now = DateTime._test_now
        return test_now() if callable(test_now) else test_now

    # ----- Creation -----

    @classmethod
    def now(cls, tz: tzinfo | None = None) -> "DateTime":
        if not cls.has_test_now():
            return cls.instance(datetime.now(tz))

        moment = cls.get_test_now()
        if tz is not None:
            moment = moment.astimezone(tz) if moment.tzinfo is not None else moment.replace(tzinfo=tz)
        return cls.instance(moment)

    @classmethod
    def today(cls, tz: tzinfo | None = None) -> "DateTime":
        """Return midnight of the current day."""
        return cls.now(tz).replace(hour=0, minute=0, second=0, microsecond=0)

    @classmethod
    def tomorrow(cls, tz: tzinfo | None = None) -> "DateTime":
        return cls.instance(cls.today(tz) + timedelta(days=1))

    @classmethod
    def yesterday(cls, tz: tzinfo | None = None) -> "DateTime":
        return cls.instance(cls.today(tz) - timedelta(days=1))

    @classmethod
    def instance(cls, moment: datetime | date) -> "DateTime":
        """Convert a datetime (or a date, taken at midnight) into this class."""
        if isinstance(moment, cls):
            return moment
        if isinstance(moment, datetime):
            return cls(moment.year, moment.month, moment.day, moment.hour, moment.minute, moment.second,
                       moment.microsecond, moment.tzinfo, fold=moment.fold)
        if isinstance(moment, date):
            return cls(moment.year, moment.month, moment.day)
        raise TypeError(f"moment must be a datetime or date, got {fmt_type(moment)}")

    @classmethod
    def parse(cls, value: str | datetime | date | None = None, tz: tzinfo | None = None) -> "DateTime":
        """
        Parse a date string.

        "now", "today", "tomorrow", "yesterday" and None are relative to the (possibly frozen) clock.
        Anything else goes through dateutil. With tz, naive results are placed in tz and aware ones
        converted to it.

        Raises:
            ValueError: If the string cannot be parsed.

        Examples:
            >>> DateTime.parse("2024-04-07 12:30")
            DateTime(2024, 4, 7, 12, 30)
        """
        if value is None:
            return cls.now(tz)
        if isinstance(value, (datetime, date)):
            return cls._in_timezone(cls.instance(value), tz)
        if not isinstance(value, str):
            raise TypeError(f"value must be a date string, got {fmt_type(value)}")

        keyword = value.strip().lower()
        if keyword in ("", "now"):
            return cls.now(tz)
        if keyword in ("today", "tomorrow", "yesterday"):
            return getattr(cls, keyword)(tz)

        return cls._in_timezone(cls.instance(date_parser.parse(value)), tz)

    @classmethod
    def create_from_id(cls, id_: UUID | ULID | str) -> "DateTime":
        """
        Extract the creation time embedded in a time-based identifier.

        Supports ULIDs and version 1, 6 and 7 UUIDs. The result is in UTC.

        Raises:
            ValueError: If the identifier is malformed or carries no timestamp.

        Examples:
            >>> DateTime.create_from_id("01ARZ3NDEKTSV4RRFFQ69G5FAV").year
            2016
        """
        if isinstance(id_, str):
            id_ = ULID.from_str(id_) if len(id_) == 26 else UUID(id_)

        if isinstance(id_, ULID):
            return cls.instance(id_.datetime)
        if not isinstance(id_, UUID):
            raise TypeError(f"id must be a UUID, ULID or str, got {fmt_type(id_)}")

        if id_.version == 1:
            ticks = (id_.time_hi_version & 0x0FFF) << 48 | id_.time_mid << 32 | id_.time_low
            return cls.instance(_GREGORIAN_EPOCH + timedelta(microseconds=ticks // 10))
        if id_.version == 6:
            ticks = id_.time_low << 28 | id_.time_mid << 12 | (id_.time_hi_version & 0x0FFF)
            return cls.instance(_GREGORIAN_EPOCH + timedelta(microseconds=ticks // 10))
        if id_.version == 7:
            return cls.instance(_UNIX_EPOCH + timedelta(milliseconds=id_.int >> 80))

        raise ValueError(f"UUID version {fmt_value(id_.version)} carries no timestamp")

    # ----- Private -----

    @staticmethod
    def _in_timezone(moment: "DateTime", tz: tzinfo | None) -> "DateTime":
        if tz is None:
            return moment
        if moment.tzinfo is None:
            return moment.replace(tzinfo=tz)
        return moment.astimezone(tz)


class DateFactory:
    """
    Build dates through a configurable handler.

    Creation calls such as date_factory.now() or date_factory.parse("2024-04-07") are dispatched to:

        - a callable, which receives the DateTime built by the default class;
        - a factory object, which handles the call itself;
        - a date class, used when it has the method, otherwise fed the default class's result
          through its instance() method or its datetime-compatible constructor;
        - DateTime, by default.

    Examples:
        >>> factory = DateFactory()
        >>> factory.use(lambda d: d.date())
        >>> factory.parse("2024-04-07 12:30")
        datetime.date(2024, 4, 7)
        >>> factory.use_default()
    """

    DEFAULT_CLASS: ClassVar[type] = DateTime

    def __init__(self) -> None:
        self._date_class: type | None = None
        self._callable: Callable[[Any], Any] | None = None
        self._factory: Any = None

    def use(self, handler: type | Callable[[Any], Any] | object) -> None:
        """
        Use a class, callable, or factory object to create dates.

        Raises:
            TypeError: If handler is None.
        """
        if handler is None:
            raise TypeError("invalid date creation handler, provide a class, callable or factory object")
        if isinstance(handler, type):
            self.use_class(handler)
        elif callable(handler):
            self.use_callable(handler)
        else:
            self.use_factory(handler)

    def use_callable(self, callable_: Callable[[Any], Any]) -> None:
        self.use_default()
        self._callable = callable_
        logger.debug("date factory uses callable %r", callable_)

    def use_class(self, date_class: type) -> None:
        self.use_default()
        self._date_class = date_class
        logger.debug("date factory uses class %s", date_class.__name__)

    def use_factory(self, factory: Any) -> None:
        self.use_default()
        self._factory = factory
        logger.debug("date factory uses factory %r", factory)

    def use_default(self) -> None:
        self._date_class = self._callable = self._factory = None

    def __getattr__(self, method: str) -> Callable[..., Any]:
        if method.startswith("_"):
            raise AttributeError(method)

        def dispatch(*args: Any, **kwargs: Any) -> Any:
            return self._create(method, *args, **kwargs)

        return dispatch

    def _create(self, method: str, *args: Any, **kwargs: Any) -> Any:
        default_class = self.DEFAULT_CLASS

        if self._callable is not None:
            return self._callable(getattr(default_class, method)(*args, **kwargs))
        if self._factory is not None:
            return getattr(self._factory, method)(*args, **kwargs)

        date_class = self._date_class or default_class
        if hasattr(date_class, method):
            return getattr(date_class, method)(*args, **kwargs)

        moment = getattr(default_class, method)(*args, **kwargs)
        if hasattr(date_class, "instance"):
            return date_class.instance(moment)
        return date_class(moment.year, moment.month, moment.day, moment.hour, moment.minute, moment.second,
                          moment.microsecond, moment.tzinfo)


date_factory = DateFactory()
