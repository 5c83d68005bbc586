"""
Sundry Pluralizer - English plural and singular word forms

Inflection rules come from the `inflection` package; this module adds the uncountable word list,
count handling and case preservation.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Sized
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
import inflection


# Classes --------------------------------------------------------------------------------------------------------------

class Pluralizer:
    """
    Pluralize and singularize English words.

    Examples:
        >>> Pluralizer.plural("child")
        'children'
        >>> Pluralizer.plural("Person")
        'People'
        >>> Pluralizer.plural("apple", 1)
        'apple'
        >>> Pluralizer.singular("USERS")
        'USER'
    """

    # @formatter:off
    UNCOUNTABLE: list[str] = [
        "audio", "bison", "cattle", "chassis", "compensation", "coreopsis", "data", "deer", "education",
        "emoji", "equipment", "evidence", "feedback", "firmware", "fish", "furniture", "gold", "hardware",
        "information", "jedi", "kin", "knowledge", "love", "metadata", "money", "moose", "news", "nutrition",
        "offspring", "plankton", "pokemon", "police", "rain", "recommended", "related", "rice", "series",
        "sheep", "software", "species", "swine", "traffic", "wheat",
    ]
    # @formatter:on

    @classmethod
    def plural(cls, value: str, count: int | Sized = 2) -> str:
        """
        Get the plural form of an English word.

        Args:
            value: The word.
            count: A number, or a sized container whose length is used. Counts of 1 and -1
                leave the word singular.
        """
        if isinstance(count, Sized) and not isinstance(count, str):
            count = len(count)

        if abs(int(count)) == 1 or cls.uncountable(value) or not value:
            return value

        return cls.match_case(inflection.pluralize(value.lower()), value)

    @classmethod
    def singular(cls, value: str) -> str:
        if cls.uncountable(value) or not value:
            return value
        return cls.match_case(inflection.singularize(value.lower()), value)

    @classmethod
    def uncountable(cls, value: str) -> bool:
        return value.lower() in cls.UNCOUNTABLE

    @staticmethod
    def match_case(value: str, comparison: str) -> str:
        """
        Give value the letter case of comparison: lower, UPPER, Title Words or Ucfirst.

        Examples:
            >>> Pluralizer.match_case("people", "Person")
            'People'
        """
        for convert in (str.lower, str.upper, _ucwords, _ucfirst):
            if convert(comparison) == comparison:
                return convert(value)
        return value


# Methods --------------------------------------------------------------------------------------------------------------

def plural(value: str, count: Any = 2) -> str:
    return Pluralizer.plural(value, count)


def singular(value: str) -> str:
    return Pluralizer.singular(value)


# Private Methods ------------------------------------------------------------------------------------------------------

def _ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def _ucwords(value: str) -> str:
    return " ".join(_ucfirst(word) for word in value.split(" "))
