"""
Sundry Stringable - an immutable, chainable wrapper over the string helpers

Every transforming method returns a new Stringable; predicates and measurements return plain values.

Examples:
    >>> str(of("  hello world ").squish().title().append("!"))
    'Hello World!'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import posixpath
import re

from collections.abc import Iterable, Mapping
from datetime import datetime, tzinfo
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from . import strings
from .abc import Conditionable
from .collections import Collection
from .dates import DateTime
from .filters import FilterKind, filter_value
from .html import HtmlString
from .markdown import inline_markdown, markdown
from .utils import class_basename

_LEADING_INT = re.compile(r"\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


# Classes --------------------------------------------------------------------------------------------------------------

class Stringable(Conditionable):
    """
    Immutable string wrapper with a fluent interface.

    Compares equal to plain strings holding the same text, and hashes like them.

    Examples:
        >>> Stringable("foo_bar").studly() == "FooBar"
        True
        >>> Stringable("draft").when_is("draft", lambda s, v: s.upper()).value()
        'DRAFT'
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = "") -> None:
        self._value = value.value() if isinstance(value, Stringable) else str(value)

    # ----- Building -----

    def append(self, *values: Any) -> "Stringable":
        return Stringable(self._value + "".join(str(value) for value in values))

    def prepend(self, *values: Any) -> "Stringable":
        return Stringable("".join(str(value) for value in values) + self._value)

    def new_line(self, count: int = 1) -> "Stringable":
        return self.append("\n" * count)

    def wrap(self, before: str, after: str | None = None) -> "Stringable":
        return Stringable(strings.wrap(self._value, before, after))

    def unwrap(self, before: str, after: str | None = None) -> "Stringable":
        return Stringable(strings.unwrap(self._value, before, after))

    def start(self, prefix: str) -> "Stringable":
        return Stringable(strings.start(self._value, prefix))

    def finish(self, cap: str) -> "Stringable":
        return Stringable(strings.finish(self._value, cap))

    def repeat(self, times: int) -> "Stringable":
        return Stringable(strings.repeat(self._value, times))

    def pad_both(self, length: int, pad: str = " ") -> "Stringable":
        return Stringable(strings.pad_both(self._value, length, pad))

    def pad_left(self, length: int, pad: str = " ") -> "Stringable":
        return Stringable(strings.pad_left(self._value, length, pad))

    def pad_right(self, length: int, pad: str = " ") -> "Stringable":
        return Stringable(strings.pad_right(self._value, length, pad))

    # ----- Slicing -----

    def after(self, search: str) -> "Stringable":
        return Stringable(strings.after(self._value, search))

    def after_last(self, search: str) -> "Stringable":
        return Stringable(strings.after_last(self._value, search))

    def before(self, search: str) -> "Stringable":
        return Stringable(strings.before(self._value, search))

    def before_last(self, search: str) -> "Stringable":
        return Stringable(strings.before_last(self._value, search))

    def between(self, start: str, end: str) -> "Stringable":
        return Stringable(strings.between(self._value, start, end))

    def between_first(self, start: str, end: str) -> "Stringable":
        return Stringable(strings.between_first(self._value, start, end))

    def substr(self, start: int, length: int | None = None) -> "Stringable":
        return Stringable(strings.substr(self._value, start, length))

    def take(self, limit: int) -> "Stringable":
        return Stringable(strings.take(self._value, limit))

    def limit(self, limit: int = 100, end: str | None = None) -> "Stringable":
        return Stringable(strings.limit(self._value, limit, end))

    def words(self, words: int = 100, end: str | None = None) -> "Stringable":
        return Stringable(strings.words(self._value, words, end))

    def excerpt(self, phrase: str = "", radius: int | None = None, omission: str | None = None) -> str | None:
        return strings.excerpt(self._value, phrase, radius, omission)

    def char_at(self, index: int) -> str | None:
        return strings.char_at(self._value, index)

    def basename(self, suffix: str = "") -> "Stringable":
        """
        Return the trailing component of a path, without suffix when it ends with it.

        Examples:
            >>> str(Stringable("/var/log/app.log").basename(".log"))
            'app'
        """
        name = posixpath.basename(self._value.rstrip("/"))
        if suffix and name.endswith(suffix) and name != suffix:
            name = name[:-len(suffix)]
        return Stringable(name)

    def dirname(self, levels: int = 1) -> "Stringable":
        """
        Return the parent directory path, levels up.

        Examples:
            >>> str(Stringable("/var/log/app.log").dirname(2))
            '/var'
        """
        path = self._value
        for _ in range(levels):
            path = _dirname(path)
        return Stringable(path)

    def class_basename(self) -> "Stringable":
        return Stringable(class_basename(self._value))

    # ----- Case -----

    def lower(self) -> "Stringable":
        return Stringable(strings.lower(self._value))

    def upper(self) -> "Stringable":
        return Stringable(strings.upper(self._value))

    def title(self) -> "Stringable":
        return Stringable(strings.title(self._value))

    def headline(self) -> "Stringable":
        return Stringable(strings.headline(self._value))

    def apa(self) -> "Stringable":
        return Stringable(strings.apa(self._value))

    def camel(self) -> "Stringable":
        return Stringable(strings.camel(self._value))

    def studly(self) -> "Stringable":
        return Stringable(strings.studly(self._value))

    def snake(self, delimiter: str = "_") -> "Stringable":
        return Stringable(strings.snake(self._value, delimiter))

    def kebab(self) -> "Stringable":
        return Stringable(strings.kebab(self._value))

    def slug(self, separator: str = "-", language: str | None = "en",
             dictionary: Mapping[str, str] | None = None) -> "Stringable":
        return Stringable(strings.slug(self._value, separator, language, dictionary))

    def ucfirst(self) -> "Stringable":
        return Stringable(strings.ucfirst(self._value))

    def lcfirst(self) -> "Stringable":
        return Stringable(strings.lcfirst(self._value))

    def ucsplit(self) -> Collection:
        return Collection(strings.ucsplit(self._value))

    def convert_case(self, mode: strings.CaseMode | str = strings.CaseMode.FOLD) -> "Stringable":
        return Stringable(strings.convert_case(self._value, mode))

    def plural(self, count: Any = 2) -> "Stringable":
        return Stringable(strings.plural(self._value, count))

    def plural_studly(self, count: Any = 2) -> "Stringable":
        return Stringable(strings.plural_studly(self._value, count))

    def singular(self) -> "Stringable":
        return Stringable(strings.singular(self._value))

    # ----- Replacing -----

    def replace(self, search: str | Iterable[str], replace: str | Iterable[str],
                case_sensitive: bool = True) -> "Stringable":
        return Stringable(strings.replace(search, replace, self._value, case_sensitive))

    def replace_array(self, search: str, replace: Iterable[str] | Mapping[Any, str]) -> "Stringable":
        return Stringable(strings.replace_array(search, replace, self._value))

    def replace_first(self, search: str, replace: str) -> "Stringable":
        return Stringable(strings.replace_first(search, replace, self._value))

    def replace_last(self, search: str, replace: str) -> "Stringable":
        return Stringable(strings.replace_last(search, replace, self._value))

    def replace_start(self, search: str, replace: str) -> "Stringable":
        return Stringable(strings.replace_start(search, replace, self._value))

    def replace_end(self, search: str, replace: str) -> "Stringable":
        return Stringable(strings.replace_end(search, replace, self._value))

    def replace_matches(self, pattern: str | Iterable[str], replace: str | Callable[[re.Match], str],
                        limit: int = -1) -> "Stringable":
        return Stringable(strings.replace_matches(pattern, replace, self._value, limit))

    def remove(self, search: str | Iterable[str], case_sensitive: bool = True) -> "Stringable":
        return Stringable(strings.remove(search, self._value, case_sensitive))

    def swap(self, mapping: Mapping[str, str]) -> "Stringable":
        return Stringable(strings.swap(mapping, self._value))

    def substr_replace(self, replace: str, offset: int = 0, length: int | None = None) -> "Stringable":
        return Stringable(strings.substr_replace(self._value, replace, offset, length))

    def mask(self, character: str, index: int, length: int | None = None) -> "Stringable":
        return Stringable(strings.mask(self._value, character, index, length))

    def reverse(self) -> "Stringable":
        return Stringable(strings.reverse(self._value))

    # ----- Cleaning -----

    def trim(self, characters: str | None = None) -> "Stringable":
        return Stringable(self._value.strip(characters))

    def ltrim(self, characters: str | None = None) -> "Stringable":
        return Stringable(self._value.lstrip(characters))

    def rtrim(self, characters: str | None = None) -> "Stringable":
        return Stringable(self._value.rstrip(characters))

    def squish(self) -> "Stringable":
        return Stringable(strings.squish(self._value))

    def strip_tags(self, allowed_tags: str | Iterable[str] | None = None) -> "Stringable":
        return Stringable(strings.strip_tags(self._value, allowed_tags))

    def numbers(self) -> "Stringable":
        return Stringable(strings.numbers(self._value))

    def ascii(self, language: str = "en") -> "Stringable":
        return Stringable(strings.ascii(self._value, language))

    def transliterate(self, unknown: str = "?", strict: bool = False) -> "Stringable":
        return Stringable(strings.transliterate(self._value, unknown, strict))

    def word_wrap(self, characters: int | None = None, break_: str = "\n",
                  cut_long_words: bool = False) -> "Stringable":
        return Stringable(strings.word_wrap(self._value, characters, break_, cut_long_words))

    # ----- Splitting -----

    def explode(self, delimiter: str, limit: int | None = None) -> Collection:
        """
        Split by a literal delimiter.

        A positive limit caps the number of pieces (the last one holds the rest); a negative limit drops
        that many pieces from the end.

        Examples:
            >>> Stringable("a,b,c").explode(",", 2).all()
            ['a', 'b,c']
        """
        if delimiter == "":
            raise ValueError("delimiter cannot be empty")
        if limit is None:
            return Collection(self._value.split(delimiter))
        if limit < 0:
            return Collection(self._value.split(delimiter)[:limit])
        return Collection(self._value.split(delimiter, max(limit, 1) - 1))

    def split(self, pattern: str | int, limit: int = -1) -> Collection:
        """
        Split by a regex, or into chunks of the given size when pattern is an int.

        Examples:
            >>> Stringable("one, two,three").split(r",\\s*").all()
            ['one', 'two', 'three']
            >>> Stringable("abcde").split(2).all()
            ['ab', 'cd', 'e']
        """
        if isinstance(pattern, int) and not isinstance(pattern, bool):
            if pattern < 1:
                raise ValueError(f"chunk length must be at least 1, got {pattern}")
            return Collection([self._value[i:i + pattern] for i in range(0, len(self._value), pattern)])
        return Collection(re.split(pattern, self._value, maxsplit=max(limit, 1) - 1 if limit > 0 else 0))

    def match(self, pattern: str) -> "Stringable":
        return Stringable(strings.match(pattern, self._value))

    def match_all(self, pattern: str) -> Collection:
        return strings.match_all(pattern, self._value)

    def parse_callback(self, default: str | None = None) -> tuple[str, str | None]:
        return strings.parse_callback(self._value, default)

    # ----- Predicates and measurements -----

    def contains(self, needles: str | Iterable[str], ignore_case: bool = False) -> bool:
        return strings.contains(self._value, needles, ignore_case)

    def contains_all(self, needles: Iterable[str], ignore_case: bool = False) -> bool:
        return strings.contains_all(self._value, needles, ignore_case)

    def starts_with(self, needles: Any) -> bool:
        return strings.starts_with(self._value, needles)

    def ends_with(self, needles: Any) -> bool:
        return strings.ends_with(self._value, needles)

    def exactly(self, value: Any) -> bool:
        if isinstance(value, Stringable):
            value = value.value()
        return self._value == value

    def is_pattern(self, pattern: str | Iterable[str], ignore_case: bool = False) -> bool:
        return strings.is_pattern(pattern, self._value, ignore_case)

    def is_match(self, pattern: str | Iterable[str]) -> bool:
        return strings.is_match(pattern, self._value)

    def test(self, pattern: str) -> bool:
        return strings.is_match(pattern, self._value)

    def is_ascii(self) -> bool:
        return strings.is_ascii(self._value)

    def is_json(self) -> bool:
        return strings.is_json(self._value)

    def is_url(self, protocols: Iterable[str] | None = None) -> bool:
        return strings.is_url(self._value, protocols)

    def is_uuid(self) -> bool:
        return strings.is_uuid(self._value)

    def is_ulid(self) -> bool:
        return strings.is_ulid(self._value)

    def is_empty(self) -> bool:
        return self._value == ""

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def length(self) -> int:
        return strings.length(self._value)

    def position(self, needle: str, offset: int = 0) -> int | None:
        return strings.position(self._value, needle, offset)

    def substr_count(self, needle: str, offset: int = 0, length: int | None = None) -> int:
        return strings.substr_count(self._value, needle, offset, length)

    def word_count(self, characters: str | None = None) -> int:
        return strings.word_count(self._value, characters)

    # ----- Flow -----

    def pipe(self, callback: Callable[["Stringable"], Any]) -> "Stringable":
        """Pass the instance to callback and wrap the result."""
        return Stringable(callback(self))

    def tap(self, callback: Callable[["Stringable"], Any]) -> "Stringable":
        """Pass the instance to callback and return the instance."""
        callback(self)
        return self

    def when_contains(self, needles: str | Iterable[str], callback: Callable, default: Callable | None = None):
        return self.when(self.contains(needles), callback, default)

    def when_contains_all(self, needles: Iterable[str], callback: Callable, default: Callable | None = None):
        return self.when(self.contains_all(needles), callback, default)

    def when_empty(self, callback: Callable, default: Callable | None = None):
        return self.when(self.is_empty(), callback, default)

    def when_not_empty(self, callback: Callable, default: Callable | None = None):
        return self.when(self.is_not_empty(), callback, default)

    def when_starts_with(self, needles: Any, callback: Callable, default: Callable | None = None):
        return self.when(self.starts_with(needles), callback, default)

    def when_ends_with(self, needles: Any, callback: Callable, default: Callable | None = None):
        return self.when(self.ends_with(needles), callback, default)

    def when_exactly(self, value: Any, callback: Callable, default: Callable | None = None):
        return self.when(self.exactly(value), callback, default)

    def when_not_exactly(self, value: Any, callback: Callable, default: Callable | None = None):
        return self.when(not self.exactly(value), callback, default)

    def when_is(self, pattern: str | Iterable[str], callback: Callable, default: Callable | None = None):
        return self.when(self.is_pattern(pattern), callback, default)

    def when_is_ascii(self, callback: Callable, default: Callable | None = None):
        return self.when(self.is_ascii(), callback, default)

    def when_is_uuid(self, callback: Callable, default: Callable | None = None):
        return self.when(self.is_uuid(), callback, default)

    def when_is_ulid(self, callback: Callable, default: Callable | None = None):
        return self.when(self.is_ulid(), callback, default)

    def when_test(self, pattern: str, callback: Callable, default: Callable | None = None):
        return self.when(self.test(pattern), callback, default)

    # ----- Conversion -----

    def markdown(self, options: Mapping[str, Any] | None = None) -> "Stringable":
        return Stringable(markdown(self._value, options))

    def inline_markdown(self, options: Mapping[str, Any] | None = None) -> "Stringable":
        return Stringable(inline_markdown(self._value, options))

    def to_html_string(self) -> HtmlString:
        return HtmlString(self._value)

    def to_base64(self) -> "Stringable":
        return Stringable(strings.to_base64(self._value))

    def from_base64(self, strict: bool = False) -> "Stringable":
        return Stringable(strings.from_base64(self._value, strict))

    def value(self) -> str:
        return self._value

    def to_string(self) -> str:
        return self._value

    def to_integer(self, base: int = 10) -> int:
        """
        Convert to an integer, leniently: the leading integer is used and anything unparsable gives 0.

        Examples:
            >>> Stringable("42 apples").to_integer()
            42
            >>> Stringable("ff").to_integer(16)
            255
        """
        if base == 10:
            found = _LEADING_INT.match(self._value)
            return int(found.group(0)) if found else 0
        try:
            return int(self._value.strip(), base)
        except ValueError:
            return 0

    def to_float(self) -> float:
        found = _LEADING_FLOAT.match(self._value)
        return float(found.group(0)) if found else 0.0

    def to_boolean(self) -> bool:
        """True for "1", "true", "on" and "yes" (case-insensitive), False for anything else."""
        return filter_value(self._value, FilterKind.VALIDATE_BOOL) is True

    def to_date(self, format: str | None = None, tz: tzinfo | None = None) -> DateTime:
        """
        Parse the string as a date; format uses strptime directives.

        Raises:
            ValueError: If the string does not parse.
        """
        if format is None:
            return DateTime.parse(self._value, tz)
        moment = datetime.strptime(self._value, format)
        return DateTime.parse(moment, tz)

    # ----- Dunders -----

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Stringable({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Stringable):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __getitem__(self, index: int | slice) -> str:
        return self._value[index]

    def __contains__(self, needle: object) -> bool:
        return isinstance(needle, str) and needle in self._value

    def __iter__(self):
        return iter(self._value)


# Methods --------------------------------------------------------------------------------------------------------------

def of(value: Any = "") -> Stringable:
    """Get a new Stringable object from the given value."""
    return Stringable(value)


# Private Methods ------------------------------------------------------------------------------------------------------

def _dirname(path: str) -> str:
    stripped = path.rstrip("/")
    if stripped == "":
        return "/" if path.startswith("/") else "."
    parent = posixpath.dirname(stripped)
    if parent == "":
        return "."
    return parent.rstrip("/") or "/"
