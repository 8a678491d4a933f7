"""Ready to use filters.

Each filter is an :class:`AttributeFilter` bound to a set named after the
intent of the filter, for example ``should_be_stripped``.
"""

from typing import Any

from .base import AttributeFilter
from .case import CAPITALIZE, DOWNCASE, FULLY_CAPITALIZE, TITLEIZE, UPCASE
from .convert import TO_B, TO_F, TO_I, TO_NUMBERS, TO_R, TO_S
from .fill import FILL
from .join import JOIN
from .order import REVERSE, SHUFFLE
from .pick import PICK
from .split import SPLIT
from .squeeze import SQUEEZE, SQUISH
from .strip import STRIP

__all__ = (
    "AttributeFilter",
    "CAPITALIZE",
    "CONVERSIONS_ORDER",
    "DOWNCASE",
    "FILL",
    "FILTERS",
    "FILTERS_ORDER",
    "FULLY_CAPITALIZE",
    "JOIN",
    "PICK",
    "REVERSE",
    "SHUFFLE",
    "SPLIT",
    "SQUEEZE",
    "SQUISH",
    "STRIP",
    "TITLEIZE",
    "TO_B",
    "TO_F",
    "TO_I",
    "TO_NUMBERS",
    "TO_R",
    "TO_S",
    "UPCASE",
    "convert_attributes",
    "filter_attributes",
)

CONVERSIONS_ORDER: tuple[AttributeFilter, ...] = (
    TO_R,
    TO_F,
    TO_NUMBERS,
    TO_I,
    TO_S,
    TO_B,
)


def convert_attributes(model: Any) -> None:
    """Run all conversion filters on the model."""
    for attribute_filter in CONVERSIONS_ORDER:
        attribute_filter.apply(model)


FILTERS_ORDER: tuple[AttributeFilter, ...] = (
    SPLIT,
    JOIN,
    *CONVERSIONS_ORDER,
    SQUEEZE,
    STRIP,
    UPCASE,
    DOWNCASE,
    CAPITALIZE,
    FULLY_CAPITALIZE,
    TITLEIZE,
    FILL,
)

FILTERS: dict[str, AttributeFilter] = {
    attribute_filter.name: attribute_filter
    for attribute_filter in (
        *FILTERS_ORDER,
        REVERSE,
        SHUFFLE,
        SQUISH,
        PICK,
    )
}


def filter_attributes(model: Any) -> None:
    """Run the common filters on the model.

    The filters run in order: split, join, conversions, squeeze, strip,
    upcase, downcase, capitalize, fully capitalize, titleize and fill.
    Reverse, shuffle, squish and pick only run when applied explicitly.
    """
    for attribute_filter in FILTERS_ORDER:
        attribute_filter.apply(model)
