"""Filters changing the order of characters or elements."""

import random
from collections.abc import Sequence
from typing import Any

from attribute_filters._helper import each_element
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter, option_aliases

__all__ = ("REVERSE", "SHUFFLE", "SharedGenerator")

_ENUMERABLE_ALIASES = ("enum", "enums", "whole_enums")


def _reversed(value: Any) -> Any:
    if isinstance(value, Sequence):
        return value[::-1]
    if isinstance(value, dict):
        return dict(reversed(value.items()))
    return value


def reverse(value: Any, context: FilterContext) -> Any:
    """Reverse strings, or whole containers with ``reverse_enumerable``."""
    if context.annotation("reverse_enumerable"):
        return _reversed(value)
    return each_element(value, _reversed)


def _shuffled(value: Any, generator: random.Random) -> Any:
    if isinstance(value, str):
        characters = list(value)
        generator.shuffle(characters)
        return "".join(characters)
    if isinstance(value, (list, tuple)):
        elements = list(value)
        generator.shuffle(elements)
        return type(value)(elements)
    return value


class SharedGenerator:
    """A random generator kept by reference when annotations are copied.

    Copies of the holder are the holder itself, so the state of the generator
    survives registry writes that copy annotations.
    """

    __slots__ = ("generator",)

    def __init__(self, generator: random.Random) -> None:
        self.generator = generator

    def __copy__(self) -> "SharedGenerator":
        return self

    def __deepcopy__(self, memo: dict) -> "SharedGenerator":
        return self

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SharedGenerator):
            return self.generator is other.generator
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SharedGenerator({self.generator!r})"


def _share(generator: Any) -> Any:
    if isinstance(generator, random.Random):
        return SharedGenerator(generator)
    return generator


def shuffle(value: Any, context: FilterContext) -> Any:
    """Shuffle characters of strings, or whole containers with ``shuffle_enumerable``.

    The ``shuffle_generator`` annotation may hold a ``random.Random`` instance,
    shared by every pass and advancing with each of them, or a seed giving the
    same order on every pass.
    """
    enumerable, generator = context.annotation(
        "shuffle_enumerable", "shuffle_generator"
    )
    if isinstance(generator, SharedGenerator):
        generator = generator.generator
    elif not isinstance(generator, random.Random):
        generator = random.Random(generator)
    if enumerable:
        return _shuffled(value, generator)
    return each_element(value, lambda element: _shuffled(element, generator))


REVERSE = AttributeFilter(
    name="reverse",
    set_name="should_be_reversed",
    transform=reverse,
    options=option_aliases(
        reverse_enumerable=(*_ENUMERABLE_ALIASES, "reverse_enums"),
    ),
    default_option="reverse_enumerable",
)

SHUFFLE = AttributeFilter(
    name="shuffle",
    set_name="should_be_shuffled",
    transform=shuffle,
    options=option_aliases(
        shuffle_enumerable=(*_ENUMERABLE_ALIASES, "shuffle_enums"),
        shuffle_generator=("random_generator", "generator", "rnd"),
    ),
    default_option="shuffle_generator",
    converters={"shuffle_generator": _share},
)
