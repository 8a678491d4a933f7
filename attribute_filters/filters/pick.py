"""Filter picking characters or elements from values.

Strings are split with ``pick_separator`` (into characters by default), the
elements at the selected positions are picked and joined back with
``pick_join``, which defaults to the separator when it is a string.

Positions are selected from ``pick_from`` to ``pick_to`` inclusively every
``pick_step`` elements, or with ``pick_range`` given as a ``range`` or a
``slice``. Positions past the end pick empty elements.

Example:
    sets.pick_attributes("initials", separator=" ", step=2)
    # "John Ronald Reuel Tolkien" -> "John Reuel"

    sets.pick_attributes("month_day", range=range(-4, 0))
    # "2024-03-01" -> "3-01"
"""

import re
from collections.abc import Sequence
from typing import Any

from attribute_filters._helper import each_element
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter, option_aliases

__all__ = ("PICK",)


def _split(text: str, separator: Any) -> list[str]:
    if isinstance(separator, re.Pattern):
        return separator.split(text)
    if separator == "":
        return list(text)
    if separator == " ":
        return text.split()
    return text.split(separator)


def _positions(
    length: int, start: Any, stop: Any, step: Any, selection: Any
) -> Sequence[int]:
    if selection is None:
        start = 0 if start is None else start
        stop = length - 1 if stop is None else stop
        selection = range(start, stop + 1)
    elif isinstance(selection, slice):
        selection = range(*selection.indices(length))
    elif not isinstance(selection, range):
        selection = tuple(selection)
    if step is not None and step != 1:
        selection = selection[::step]
    return selection


def _pick(elements: Sequence[Any], start, stop, step, selection) -> list[Any]:
    length = len(elements)
    return [
        elements[position] if -length <= position < length else None
        for position in _positions(length, start, stop, step, selection)
    ]


def _join(elements: list[Any], joiner: Any) -> str:
    return (joiner or "").join(
        "" if element is None else str(element) for element in elements
    )


def pick(value: Any, context: FilterContext) -> Any:
    enumerable, step, start, stop, selection, separator, joiner = (
        context.annotation(
            "pick_enumerable",
            "pick_step",
            "pick_from",
            "pick_to",
            "pick_range",
            "pick_separator",
            "pick_join",
        )
    )
    if separator is None:
        separator = ""
    if joiner is None and isinstance(separator, str):
        joiner = separator

    def pick_text(text: str) -> str:
        picked = _pick(_split(text, separator), start, stop, step, selection)
        return _join(picked, joiner)

    if not enumerable:
        return each_element(value, pick_text, only=str)
    if isinstance(value, str):
        return pick_text(value)
    if isinstance(value, (list, tuple)):
        return type(value)(_pick(value, start, stop, step, selection))
    if isinstance(value, dict):
        items = _pick(list(value.items()), start, stop, step, selection)
        return dict(item for item in items if item is not None)
    return value


PICK = AttributeFilter(
    name="pick",
    set_name="should_be_picked",
    transform=pick,
    options=option_aliases(
        pick_enumerable=("enum", "enums", "whole_enums", "pick_enums"),
        pick_step=("step", "with_step", "each"),
        pick_from=("from", "head", "take", "first", "pick_first", "pick_head"),
        pick_to=("to", "tail", "last", "pick_last", "pick_tail"),
        pick_range=("range",),
        pick_separator=("separator", "regex", "split_with", "split_separator"),
        pick_join=("joiner", "join", "join_with"),
    ),
    default_option="pick_separator",
)
