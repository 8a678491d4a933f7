"""Filters changing the case of letters.

Example:
    class User(AttributeFilters, TrackedObject):
        attribute_sets = SetRegistry()
        attribute_sets.upcase_attributes("country_code")
        attribute_sets.titleize_attributes("real_name")

    user = User(country_code="pl", real_name="jan_kowalski")
    user.filter_attributes()

    print(user.country_code, user.real_name)
    #> PL Jan Kowalski
"""

import re
from typing import Any

from attribute_filters._helper import each_element
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter

__all__ = (
    "DOWNCASE",
    "UPCASE",
    "CAPITALIZE",
    "FULLY_CAPITALIZE",
    "TITLEIZE",
)

_WORD_START = re.compile(r"\b(?<!['’`])[^\W_]")


def downcase(value: Any, context: FilterContext) -> Any:
    return each_element(value, str.lower, only=str)


def upcase(value: Any, context: FilterContext) -> Any:
    return each_element(value, str.upper, only=str)


def capitalize(value: Any, context: FilterContext) -> Any:
    """Upper case the first character and lower case the rest."""
    return each_element(value, str.capitalize, only=str)


def _fully_capitalize(text: str) -> str:
    return " ".join(word.capitalize() for word in text.split())


def fully_capitalize(value: Any, context: FilterContext) -> Any:
    """Capitalize each word and squeeze whitespace between words."""
    return each_element(value, _fully_capitalize, only=str)


def _titleize(text: str) -> str:
    text = text.replace("_", " ").lower()
    return _WORD_START.sub(lambda match: match.group(0).upper(), text)


def titleize(value: Any, context: FilterContext) -> Any:
    """Turn underscores into spaces and upper case the first letter of each word.

    Letters following an apostrophe do not start a word, so ``"o'neil's"``
    becomes ``"O'neil's"``.
    """
    return each_element(value, _titleize, only=str)


DOWNCASE = AttributeFilter(
    name="downcase",
    set_name="should_be_downcased",
    transform=downcase,
)

UPCASE = AttributeFilter(
    name="upcase",
    set_name="should_be_upcased",
    transform=upcase,
)

CAPITALIZE = AttributeFilter(
    name="capitalize",
    set_name="should_be_capitalized",
    transform=capitalize,
)

FULLY_CAPITALIZE = AttributeFilter(
    name="fully_capitalize",
    set_name="should_be_fully_capitalized",
    transform=fully_capitalize,
)

TITLEIZE = AttributeFilter(
    name="titleize",
    set_name="should_be_titleized",
    transform=titleize,
)
