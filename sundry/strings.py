"""
Sundry String Tools

Plain functions over str: searching and slicing, case conversion, padding, masking, replacing,
transliteration and predicates. Regex arguments use Python `re` syntax (no delimiters, \\1 back-references).

Case conversions (snake, camel, studly) are memoized in `case_cache`; call flush_cache() to reset it.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import base64
import json
import re
import textwrap
import unicodedata

from collections.abc import Iterable, Mapping
from enum import StrEnum, unique
from typing import Any, Callable
from uuid import UUID

# Third-party ----------------------------------------------------------------------------------------------------------
from unidecode import unidecode

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import Collection
from .pluralizer import Pluralizer
from .validators import validate_url

_UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_ULID_PATTERN = re.compile(r"[0-7][0-9A-HJKMNP-TV-Za-hjkmnp-tv-z]{25}")
_WORD_START = re.compile(r"(^|[ \t\r\n\f\v])([^ \t\r\n\f\v])")


# Classes --------------------------------------------------------------------------------------------------------------

class StrConf:
    """Defaults for string helpers."""
    # @formatter:off
    LIMIT_END: str = "..."
    EXCERPT_RADIUS: int = 100
    EXCERPT_OMISSION: str = "..."
    WORD_WRAP_WIDTH: int = 75
    APA_MINOR_WORDS: tuple[str, ...] = (
        "and", "as", "but", "for", "if", "nor", "or", "so", "yet", "a", "an", "the",
        "at", "by", "in", "of", "off", "on", "per", "to", "up", "via",
    )
    APA_END_PUNCTUATION: tuple[str, ...] = (".", "!", "?", ":", "—", ",")
    SLUG_DICTIONARY: dict[str, str] = {"@": "at"}
    ASCII_LANGUAGE_MAPS: dict[str, dict[str, str]] = {
        "de": {"ä": "ae", "ö": "oe", "ü": "ue", "Ä": "Ae", "Ö": "Oe", "Ü": "Ue", "ß": "ss"},
        "da": {"æ": "ae", "ø": "oe", "å": "aa", "Æ": "Ae", "Ø": "Oe", "Å": "Aa"},
        "nb": {"æ": "ae", "ø": "oe", "å": "aa", "Æ": "Ae", "Ø": "Oe", "Å": "Aa"},
    }
    # @formatter:on


@unique
class CaseMode(StrEnum):
    UPPER = "upper"
    LOWER = "lower"
    TITLE = "title"
    FOLD = "fold"


class CaseCache:
    """Memoization tables for case conversions."""

    def __init__(self) -> None:
        self.snake: dict[tuple[str, str], str] = {}
        self.camel: dict[str, str] = {}
        self.studly: dict[str, str] = {}

    def flush(self) -> None:
        self.snake.clear()
        self.camel.clear()
        self.studly.clear()

    def __len__(self) -> int:
        return len(self.snake) + len(self.camel) + len(self.studly)


case_cache = CaseCache()


# Methods --------------------------------------------------------------------------------------------------------------

def flush_cache() -> None:
    """Remove all memoized case conversions."""
    case_cache.flush()


def after(subject: str, search: str) -> str:
    """
    Return the remainder of a string after the first occurrence of search.

    Examples:
        >>> after("This is my name", "This is")
        ' my name'
    """
    if search == "":
        return subject
    _, found, tail = subject.partition(search)
    return tail if found else subject


def after_last(subject: str, search: str) -> str:
    if search == "":
        return subject
    position = subject.rfind(search)
    return subject if position == -1 else subject[position + len(search):]


def before(subject: str, search: str) -> str:
    """Return the portion of a string before the first occurrence of search."""
    if search == "":
        return subject
    position = subject.find(search)
    return subject if position == -1 else subject[:position]


def before_last(subject: str, search: str) -> str:
    if search == "":
        return subject
    position = subject.rfind(search)
    return subject if position == -1 else subject[:position]


def between(subject: str, start_: str, end: str) -> str:
    """
    Return the portion of a string between the first start_ and the last end.

    Examples:
        >>> between("[a] and [b]", "[", "]")
        'a] and [b'
    """
    if start_ == "" or end == "":
        return subject
    return before_last(after(subject, start_), end)


def between_first(subject: str, start_: str, end: str) -> str:
    """Return the smallest portion of a string between start_ and end."""
    if start_ == "" or end == "":
        return subject
    return before(after(subject, start_), end)


def apa(value: str) -> str:
    """
    Convert a string to title case following the APA guidelines.

    Minor words of three letters or fewer stay lowercase unless they start the title or
    follow end punctuation.

    Examples:
        >>> apa("a guide to the galaxy")
        'A Guide to the Galaxy'
    """
    if value.strip() == "":
        return value

    words = value.split()
    for i, word in enumerate(words):
        lower_word = word.lower()
        if "-" in lower_word:
            words[i] = "-".join(part if _is_minor(part) else ucfirst(part) for part in lower_word.split("-"))
        elif _is_minor(lower_word) and not (i == 0 or words[i - 1][-1:] in StrConf.APA_END_PUNCTUATION):
            words[i] = lower_word
        else:
            words[i] = ucfirst(lower_word)

    return " ".join(words)


def ascii(value: str, language: str = "en") -> str:
    """
    Transliterate a string to ASCII.

    Language-specific rules from StrConf.ASCII_LANGUAGE_MAPS apply first, e.g. German "ä" -> "ae".

    Examples:
        >>> ascii("Žluťoučký kůň")
        'Zlutoucky kun'
        >>> ascii("Müller", "de")
        'Mueller'
    """
    mapping = StrConf.ASCII_LANGUAGE_MAPS.get(language)
    if mapping:
        value = value.translate(str.maketrans(mapping))
    return unidecode(value)


def transliterate(string: str, unknown: str = "?", strict: bool = False) -> str:
    """
    Transliterate a string to its closest ASCII representation.

    Args:
        string: Text to transliterate.
        unknown: Replacement for characters without a transliteration.
        strict: Raise UnidecodeError for such characters instead of replacing them.
    """
    if strict:
        return unidecode(string, errors="strict")
    return unidecode(string, errors="replace", replace_str=unknown)


def camel(value: str) -> str:
    """
    Convert a value to camel case.

    Examples:
        >>> camel("foo_bar-baz")
        'fooBarBaz'
    """
    if value not in case_cache.camel:
        case_cache.camel[value] = lcfirst(studly(value))
    return case_cache.camel[value]


def studly(value: str) -> str:
    """
    Convert a value to studly caps case.

    Examples:
        >>> studly("foo_bar-baz qux")
        'FooBarBazQux'
    """
    if value not in case_cache.studly:
        words = value.replace("-", " ").replace("_", " ").split(" ")
        case_cache.studly[value] = "".join(ucfirst(word) for word in words)
    return case_cache.studly[value]


def snake(value: str, delimiter: str = "_") -> str:
    """
    Convert a string to snake case.

    Examples:
        >>> snake("fooBar Baz")
        'foo_bar_baz'
        >>> snake("FooBar", "-")
        'foo-bar'
    """
    key = (value, delimiter)
    if key in case_cache.snake:
        return case_cache.snake[key]

    result = value
    if not (value.isascii() and value.isalpha() and value.islower()):
        result = re.sub(r"\s+", "", _ucwords(value))
        result = re.sub(r"(.)(?=[A-Z])", lambda m: m.group(1) + delimiter, result).lower()

    case_cache.snake[key] = result
    return result


def kebab(value: str) -> str:
    return snake(value, "-")


def title(value: str) -> str:
    """
    Convert the given string to title case, one capital per word.

    Examples:
        >>> title("they're in_the-loop")
        "They're In_The-Loop"
    """
    return re.sub(r"[^\W_]+(?:['’][^\W_]+)*", lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), value)


def headline(value: str) -> str:
    """
    Convert casing, hyphens and underscores to space-delimited words, each capitalized.

    Examples:
        >>> headline("EmailNotificationSent")
        'Email Notification Sent'
        >>> headline("steve_jobs")
        'Steve Jobs'
    """
    parts = value.split(" ")
    if len(parts) > 1:
        parts = [title(part) for part in parts]
    else:
        parts = [title(part) for part in ucsplit("_".join(parts))]

    collapsed = replace(["-", "_", " "], "_", "_".join(parts))
    return " ".join(part for part in collapsed.split("_") if part)


def ucsplit(string: str) -> list[str]:
    """
    Split a string into pieces at uppercase characters.

    Examples:
        >>> ucsplit("FooBarBaz")
        ['Foo', 'Bar', 'Baz']
    """
    parts, current = [], ""
    for char in string:
        if char.isupper() and current:
            parts.append(current)
            current = char
        else:
            current += char
    if current:
        parts.append(current)
    return parts


def convert_case(string: str, mode: CaseMode | str = CaseMode.FOLD) -> str:
    mode = CaseMode(mode)
    if mode is CaseMode.UPPER:
        return string.upper()
    if mode is CaseMode.LOWER:
        return string.lower()
    if mode is CaseMode.TITLE:
        return title(string)
    return string.casefold()


def lower(value: str) -> str:
    return value.lower()


def upper(value: str) -> str:
    return value.upper()


def ucfirst(string: str) -> str:
    return string[:1].upper() + string[1:]


def lcfirst(string: str) -> str:
    return string[:1].lower() + string[1:]


def length(value: str) -> int:
    return len(value)


def char_at(subject: str, index: int) -> str | None:
    """Return the character at index, negative indexes counting from the end, or None when out of range."""
    size = len(subject)
    if index < -size or index > size - 1:
        return None
    return subject[index]


def contains(haystack: str, needles: str | Iterable[str], ignore_case: bool = False) -> bool:
    """
    Determine if a string contains any of the given substrings. Empty needles never match.

    Examples:
        >>> contains("This is my name", ["my", "foo"])
        True
        >>> contains("This is my name", "MY", ignore_case=True)
        True
    """
    if ignore_case:
        haystack = haystack.lower()
    for needle in _listify(needles):
        needle = needle.lower() if ignore_case else needle
        if needle != "" and needle in haystack:
            return True
    return False


def contains_all(haystack: str, needles: Iterable[str], ignore_case: bool = False) -> bool:
    return all(contains(haystack, needle, ignore_case) for needle in needles)


def starts_with(haystack: str | None, needles: Any) -> bool:
    if haystack is None:
        return False
    return any(str(needle) != "" and haystack.startswith(str(needle)) for needle in _listify(needles))


def ends_with(haystack: str | None, needles: Any) -> bool:
    if haystack is None:
        return False
    return any(str(needle) != "" and haystack.endswith(str(needle)) for needle in _listify(needles))


def excerpt(text: str, phrase: str = "", radius: int | None = None, omission: str | None = None) -> str | None:
    """
    Extract an excerpt from text around the first occurrence of phrase.

    Args:
        text: Text to search (case-insensitive).
        phrase: Phrase to center the excerpt on.
        radius: Characters kept on each side of the phrase.
        omission: Marker added where text was cut.

    Returns:
        The excerpt, or None when the phrase is not found.

    Examples:
        >>> excerpt("This is my name", "my", radius=3)
        '...is my na...'
    """
    radius = StrConf.EXCERPT_RADIUS if radius is None else radius
    omission = StrConf.EXCERPT_OMISSION if omission is None else omission

    match = re.match(r"^(.*?)(" + re.escape(phrase) + r")(.*)$", text, flags=re.IGNORECASE)
    if not match:
        return None

    head = match.group(1).lstrip()
    head_part = head[max(len(head) - radius, 0):][:radius].lstrip()
    if head_part != head:
        head_part = omission + head_part

    tail = match.group(3).rstrip()
    tail_part = tail[:radius].rstrip()
    if tail_part != tail:
        tail_part = tail_part + omission

    return head_part + match.group(2) + tail_part


def finish(value: str, cap: str) -> str:
    """Cap a string with a single instance of a given value."""
    if cap == "":
        return value
    return re.sub("(?:" + re.escape(cap) + r")+\Z", "", value) + cap


def start(value: str, prefix: str) -> str:
    """Begin a string with a single instance of a given value."""
    if prefix == "":
        return value
    return prefix + re.sub(r"\A(?:" + re.escape(prefix) + ")+", "", value)


def wrap(value: str, before_: str, after_: str | None = None) -> str:
    return before_ + value + (before_ if after_ is None else after_)


def unwrap(value: str, before_: str, after_: str | None = None) -> str:
    after_ = before_ if after_ is None else after_
    if starts_with(value, before_):
        value = value[len(before_):]
    if ends_with(value, after_):
        value = value[:-len(after_)]
    return value


def is_pattern(pattern: str | Iterable[str], value: str, ignore_case: bool = False) -> bool:
    """
    Determine if a string matches a pattern where "*" is a wildcard.

    Examples:
        >>> is_pattern("foo*", "foobar")
        True
        >>> is_pattern(["baz", "*.txt"], "notes.txt")
        True
    """
    flags = re.IGNORECASE if ignore_case else 0
    for item in _listify(pattern):
        if item == value:
            return True
        if re.fullmatch(re.escape(item).replace(r"\*", ".*"), value, flags=flags):
            return True
    return False


def is_ascii(value: str) -> bool:
    return value.isascii()


def is_json(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def is_url(value: Any, protocols: Iterable[str] | None = None) -> bool:
    """Determine if a value is a valid absolute URL, optionally limited to some protocols."""
    if not isinstance(value, str):
        return False
    try:
        validate_url(value, schemes=list(protocols) if protocols else None)
    except ValueError:
        return False
    return True


def is_uuid(value: Any) -> bool:
    if isinstance(value, UUID):
        return True
    return isinstance(value, str) and _UUID_PATTERN.fullmatch(value) is not None


def is_ulid(value: Any) -> bool:
    return isinstance(value, str) and _ULID_PATTERN.fullmatch(value) is not None


def limit(value: str, limit_: int = 100, end: str | None = None) -> str:
    """
    Limit the display width of a string; wide (East Asian) characters count twice.

    Examples:
        >>> limit("The quick brown fox", 9)
        'The quick...'
    """
    end = StrConf.LIMIT_END if end is None else end
    if _display_width(value) <= limit_:
        return value

    kept, width = [], 0
    for char in value:
        char_width = _display_width(char)
        if width + char_width > limit_:
            break
        kept.append(char)
        width += char_width

    return "".join(kept).rstrip() + end


def words(value: str, words_: int = 100, end: str | None = None) -> str:
    """
    Limit the number of words in a string.

    Examples:
        >>> words("Perfectly balanced, as all things should be.", 3, " >>>")
        'Perfectly balanced, as >>>'
    """
    end = StrConf.LIMIT_END if end is None else end
    if words_ < 1:
        return value

    match = re.match(r"\s*(?:\S+\s*){1," + str(words_) + "}", value)
    if not match or len(match.group(0)) == len(value):
        return value
    return match.group(0).rstrip() + end


def mask(string: str, character: str, index: int, length_: int | None = None) -> str:
    """
    Mask a portion of a string with a repeated character.

    Examples:
        >>> mask("taylor@example.com", "*", 3)
        'tay***************'
        >>> mask("taylor@example.com", "*", -15, 3)
        'tay***@example.com'
    """
    if character == "":
        return string

    segment = substr(string, index, length_)
    if segment == "":
        return string

    size = len(string)
    start_index = index
    if index < 0:
        start_index = 0 if index < -size else size + index

    return string[:start_index] + character[0] * len(segment) + string[start_index + len(segment):]


def match(pattern: str, subject: str) -> str:
    """Return the first capture group (or the whole match) of pattern in subject, or ""."""
    found = re.search(pattern, subject)
    if not found:
        return ""
    if found.re.groups and found.group(1) is not None:
        return found.group(1)
    return found.group(0)


def is_match(pattern: str | Iterable[str], value: str) -> bool:
    return any(re.search(item, value) for item in _listify(pattern))


def match_all(pattern: str, subject: str) -> Collection:
    """Return every first capture group (or whole match) of pattern in subject."""
    compiled = re.compile(pattern)
    group = 1 if compiled.groups else 0
    return Collection([found.group(group) for found in compiled.finditer(subject)])


def numbers(value: str) -> str:
    return re.sub(r"[^0-9]", "", value)


def pad_both(value: str, length_: int, pad: str = " ") -> str:
    """
    Pad both sides of a string to the given length.

    Examples:
        >>> pad_both("James", 10, "_")
        '__James___'
    """
    short = max(0, length_ - len(value))
    return _padding(pad, short // 2) + value + _padding(pad, short - short // 2)


def pad_left(value: str, length_: int, pad: str = " ") -> str:
    return _padding(pad, max(0, length_ - len(value))) + value


def pad_right(value: str, length_: int, pad: str = " ") -> str:
    return value + _padding(pad, max(0, length_ - len(value)))


def parse_callback(callback: str, default: str | None = None) -> tuple[str, str | None]:
    """
    Parse a "Class@method" style callback into its parts.

    Examples:
        >>> parse_callback("Mailer@send")
        ('Mailer', 'send')
        >>> parse_callback("Mailer", "handle")
        ('Mailer', 'handle')
    """
    if "@" in callback:
        cls, method = callback.split("@", 1)
        return cls, method
    return callback, default


def plural(value: str, count: Any = 2) -> str:
    return Pluralizer.plural(value, count)


def plural_studly(value: str, count: Any = 2) -> str:
    """
    Pluralize the last word of a studly caps string.

    Examples:
        >>> plural_studly("VerifiedHuman")
        'VerifiedHumans'
    """
    parts = re.split(r"(.)(?=[A-Z])", value)
    last_word = parts.pop()
    return "".join(parts) + plural(last_word, count)


def singular(value: str) -> str:
    return Pluralizer.singular(value)


def position(haystack: str, needle: str, offset: int = 0) -> int | None:
    """Return the index of the first occurrence of needle at or after offset, or None."""
    found = haystack.find(needle, offset)
    return None if found == -1 else found


def repeat(string: str, times: int) -> str:
    return string * times


def replace(search: str | Iterable[str],
            replace_: str | Iterable[str],
            subject: str | Iterable[str],
            case_sensitive: bool = True) -> str | list[str]:
    """
    Replace every occurrence of search in subject.

    Lists of searches are applied in order; a single replacement string serves all of them, a list of
    replacements pairs up by position (missing ones are empty). A list of subjects returns a list.

    Examples:
        >>> replace(["a", "b"], ["1", "2"], "aabbc")
        '1122c'
        >>> replace("HELLO", "bye", "hello world", case_sensitive=False)
        'bye world'
    """
    searches = _listify(search)
    replacements = [replace_] * len(searches) if isinstance(replace_, str) else list(replace_)
    replacements += [""] * (len(searches) - len(replacements))

    def apply(text: str) -> str:
        for needle, replacement in zip(searches, replacements):
            if needle == "":
                continue
            if case_sensitive:
                text = text.replace(needle, replacement)
            else:
                text = re.sub(re.escape(needle), lambda _: replacement, text, flags=re.IGNORECASE)
        return text

    if isinstance(subject, str):
        return apply(subject)
    return [apply(text) for text in subject]


def replace_array(search: str, replace_: Iterable[str] | Mapping[Any, str], subject: str) -> str:
    """
    Replace occurrences of search one by one with the values of a list.

    Examples:
        >>> replace_array("?", ["8:30", "9:00"], "between ? and ?")
        'between 8:30 and 9:00'
    """
    if search == "":
        return subject

    replacements = list(replace_.values() if isinstance(replace_, Mapping) else replace_)
    segments = subject.split(search)
    result = segments.pop(0)
    for segment in segments:
        result += (str(replacements.pop(0)) if replacements else search) + segment
    return result


def replace_first(search: str, replace_: str, subject: str) -> str:
    if search == "":
        return subject
    found = subject.find(search)
    return subject if found == -1 else subject[:found] + replace_ + subject[found + len(search):]


def replace_last(search: str, replace_: str, subject: str) -> str:
    if search == "":
        return subject
    found = subject.rfind(search)
    return subject if found == -1 else subject[:found] + replace_ + subject[found + len(search):]


def replace_start(search: str, replace_: str, subject: str) -> str:
    if search == "" or not subject.startswith(search):
        return subject
    return replace_first(search, replace_, subject)


def replace_end(search: str, replace_: str, subject: str) -> str:
    if search == "" or not subject.endswith(search):
        return subject
    return replace_last(search, replace_, subject)


def replace_matches(pattern: str | Iterable[str],
                    replace_: str | Callable[[re.Match], str],
                    subject: str | Iterable[str],
                    limit_: int = -1) -> str | list[str]:
    """
    Replace the regex matches of pattern in subject.

    Args:
        pattern: A regex or list of regexes applied in order.
        replace_: Replacement template (\\1 style references) or a callable receiving the match.
        subject: A string or list of strings.
        limit_: Maximum replacements per pattern and subject; -1 means no limit.
    """
    count = 0 if limit_ < 0 else limit_

    def apply(text: str) -> str:
        for item in _listify(pattern):
            text = re.sub(item, replace_, text, count=count)
        return text

    if isinstance(subject, str):
        return apply(subject)
    return [apply(text) for text in subject]


def remove(search: str | Iterable[str], subject: str | Iterable[str], case_sensitive: bool = True):
    return replace(search, "", subject, case_sensitive)


def reverse(value: str) -> str:
    return value[::-1]


def slug(title_: str,
         separator: str = "-",
         language: str | None = "en",
         dictionary: Mapping[str, str] | None = None) -> str:
    """
    Generate a URL friendly "slug" from a given string.

    Examples:
        >>> slug("Hello World")
        'hello-world'
        >>> slug("user@host_name")
        'user-at-host-name'
    """
    dictionary = StrConf.SLUG_DICTIONARY if dictionary is None else dictionary
    if language:
        title_ = ascii(title_, language)

    flip = "_" if separator == "-" else "-"
    title_ = re.sub("[" + re.escape(flip) + "]+", separator, title_)

    title_ = replace(list(dictionary.keys()),
                     [separator + value + separator for value in dictionary.values()],
                     title_)

    title_ = re.sub("[^" + re.escape(separator) + r"\w\s]+", "", title_.lower())
    if separator != "_":
        title_ = title_.replace("_", "")

    title_ = re.sub("[" + re.escape(separator) + r"\s]+", separator, title_)
    return title_.strip(separator)


def squish(value: str) -> str:
    """
    Remove all "extra" blank space from the given string.

    Examples:
        >>> squish("  laravel   php \\n framework ")
        'laravel php framework'
    """
    value = re.sub(r"\A[\s﻿]+|[\s﻿]+\Z", "", value)
    return re.sub(r"(\s|ㅤ|ᅠ)+", " ", value)


def strip_tags(value: str, allowed_tags: str | Iterable[str] | None = None) -> str:
    """
    Strip HTML tags and comments from a string, keeping the allowed ones.

    Examples:
        >>> strip_tags("<p>Hello <b>World</b></p>", "<b>")
        'Hello <b>World</b>'
    """
    if isinstance(allowed_tags, str):
        allowed_tags = re.findall(r"[A-Za-z][A-Za-z0-9-]*", allowed_tags)
    allowed = {tag.lower() for tag in allowed_tags or ()}

    value = re.sub(r"<!--.*?-->", "", value, flags=re.DOTALL)
    return re.sub(r"</?([A-Za-z][A-Za-z0-9-]*)\b[^>]*>",
                  lambda m: m.group(0) if m.group(1).lower() in allowed else "",
                  value)


def substr(string: str, start_: int, length_: int | None = None) -> str:
    """
    Return the portion of a string specified by start_ and length_, both possibly negative.

    Examples:
        >>> substr("abcdef", -2)
        'ef'
        >>> substr("abcdef", 1, -2)
        'bcd'
    """
    size = len(string)
    if start_ < 0:
        start_ = max(size + start_, 0)
    if length_ is None:
        end = size
    elif length_ < 0:
        end = size + length_
    else:
        end = start_ + length_
    return string[start_:end]


def substr_count(haystack: str, needle: str, offset: int = 0, length_: int | None = None) -> int:
    """
    Count the non-overlapping occurrences of needle.

    Raises:
        ValueError: If needle is empty.
    """
    if needle == "":
        raise ValueError("needle cannot be empty")
    if length_ is None:
        return haystack.count(needle, offset)
    end = len(haystack) + length_ if length_ < 0 else offset + length_
    return haystack.count(needle, offset, end)


def substr_replace(string: str, replace_: str, offset: int = 0, length_: int | None = None) -> str:
    """Replace the portion of a string starting at offset, spanning length_ characters (or to the end)."""
    size = len(string)
    begin = min(offset if offset >= 0 else max(size + offset, 0), size)
    if length_ is None:
        end = size
    elif length_ >= 0:
        end = min(begin + length_, size)
    else:
        end = max(size + length_, begin)
    return string[:begin] + replace_ + string[end:]


def swap(mapping: Mapping[str, str], subject: str) -> str:
    """
    Replace keys of mapping with their values in a single pass, longest keys first.

    Examples:
        >>> swap({"Tacos": "Burritos", "great": "fantastic"}, "Tacos are great!")
        'Burritos are fantastic!'
    """
    keys = sorted((key for key in mapping if key != ""), key=len, reverse=True)
    if not keys:
        return subject
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda m: mapping[m.group(0)], subject)


def take(string: str, limit_: int) -> str:
    """Take the first limit_ characters, or the last ones when limit_ is negative."""
    if limit_ < 0:
        return substr(string, limit_)
    return substr(string, 0, limit_)


def to_base64(string: str) -> str:
    return base64.b64encode(string.encode("utf-8")).decode("ascii")


def from_base64(string: str, strict: bool = False) -> str:
    """
    Decode a base64 string.

    Raises:
        ValueError: If the input is not valid base64 (always checked when strict) or not UTF-8.
    """
    return base64.b64decode(string, validate=strict).decode("utf-8")


def word_count(string: str, characters: str | None = None) -> int:
    """
    Count the words in a string. Words are runs of ASCII letters, apostrophes and hyphens,
    extended by characters.
    """
    extra = re.escape(characters) if characters else ""
    return len(re.findall("[A-Za-z" + extra + "][A-Za-z'\\-" + extra + "]*", string))


def word_wrap(string: str, characters: int | None = None, break_: str = "\n", cut_long_words: bool = False) -> str:
    """
    Wrap a string to a given number of characters, keeping existing line breaks.

    Examples:
        >>> word_wrap("The quick brown fox", 10)
        'The quick\\nbrown fox'
    """
    characters = StrConf.WORD_WRAP_WIDTH if characters is None else characters
    wrapper = textwrap.TextWrapper(width=characters,
                                   break_long_words=cut_long_words,
                                   break_on_hyphens=False,
                                   replace_whitespace=False,
                                   expand_tabs=False)
    lines = []
    for line in string.split(break_):
        lines.extend(wrapper.wrap(line) or [""])
    return break_.join(lines)


# Private Methods ------------------------------------------------------------------------------------------------------

def _listify(value: Any) -> list:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _ucwords(value: str) -> str:
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), value)


def _is_minor(word: str) -> bool:
    return word in StrConf.APA_MINOR_WORDS and len(word) <= 3


def _display_width(value: str) -> int:
    return sum(2 if unicodedata.east_asian_width(char) in ("W", "F") else 1 for char in value)


def _padding(pad: str, size: int) -> str:
    if size <= 0 or pad == "":
        return ""
    return (pad * size)[:size]
