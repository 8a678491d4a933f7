"""Filters converting values to other types.

A failed conversion is replaced by the ``*_default`` annotation of the
attribute when one is registered, otherwise the error propagates. Only
``ValueError`` and ``TypeError`` count as failed conversions, arithmetic
errors such as a zero denominator always propagate.

Example:
    class Order(AttributeFilters, TrackedObject):
        attribute_sets = SetRegistry()
        attribute_sets.convert_to_integers("quantity", default=0)
        attribute_sets.convert_to_strings({"flags": {"base": 2}})

    order = Order(quantity="many", flags=5)
    order.convert_attributes()

    print(order.quantity, order.flags)
    #> 0 101
"""

import logging
import string
from collections.abc import Callable
from fractions import Fraction
from typing import Any

from attribute_filters._helper import each_element
from attribute_filters.filtering import FilterContext, Transform
from attribute_filters.filters.base import AttributeFilter, option_aliases

__all__ = ("TO_S", "TO_I", "TO_F", "TO_NUMBERS", "TO_R", "TO_B")

logger = logging.getLogger(__name__)

CONVERSION_ERRORS = (ValueError, TypeError)

_DIGITS = string.digits + string.ascii_lowercase


def _converting(
    default_key: str,
    convert: Callable[[Any, FilterContext], Any],
) -> Transform:
    def transform(value: Any, context: FilterContext) -> Any:
        def convert_element(element: Any) -> Any:
            try:
                return convert(element, context)
            except CONVERSION_ERRORS as exc:
                if not context.has_annotation(default_key):
                    raise
                logger.debug(
                    "Cannot convert %r of %s, using default: %s",
                    element,
                    context.attribute,
                    exc,
                )
                return context.annotation(default_key)

        return each_element(value, convert_element)

    return transform


def _in_base(number: int, base: int) -> str:
    if not 2 <= base <= 36:
        raise ValueError(f"Invalid base {base}")
    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    number = abs(number)
    digits = []
    while number:
        number, remainder = divmod(number, base)
        digits.append(_DIGITS[remainder])
    return sign + "".join(reversed(digits))


def to_s(value: Any, context: FilterContext) -> str:
    """Convert to a string, an integer may be rendered in ``to_s_base``."""
    if not context.has_annotation("to_s_base"):
        return "" if value is None else str(value)
    base = context.annotation("to_s_base") or 10
    if value is None:
        value = 0
    if not isinstance(value, int):
        raise TypeError(f"Cannot render {value!r} in base {base}")
    return _in_base(value, base)


def to_i(value: Any, context: FilterContext) -> int:
    """Convert to an integer, a string may be parsed in ``to_i_base``."""
    if context.has_annotation("to_i_base") and isinstance(value, str):
        return int(value, context.annotation("to_i_base") or 10)
    return int(value)


def to_f(value: Any, context: FilterContext) -> float:
    return float(value)


def to_number(value: Any, context: FilterContext) -> int | float:
    """Convert to an integer if possible, otherwise to a float."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        return int(value)
    except ValueError:
        return float(value)


def to_r(value: Any, context: FilterContext) -> Fraction:
    if isinstance(value, str):
        value = value.strip()
    return Fraction(value)


def to_b(value: Any, context: FilterContext) -> bool:
    return bool(value)


def _default_options(prefix: str, *aliases: str) -> dict[str, str]:
    return option_aliases(
        **{f"{prefix}_default": ("default", "on_error", *aliases)}
    )


TO_S = AttributeFilter(
    name="to_s",
    set_name="should_be_strings",
    transform=_converting("to_s_default", to_s),
    options={
        **_default_options("to_s"),
        **option_aliases(to_s_base=("base", "with_base")),
    },
    default_option="to_s_base",
)

TO_I = AttributeFilter(
    name="to_i",
    set_name="should_be_integers",
    transform=_converting("to_i_default", to_i),
    options={
        **_default_options("to_i"),
        **option_aliases(to_i_base=("base", "with_base")),
    },
    default_option="to_i_base",
)

TO_F = AttributeFilter(
    name="to_f",
    set_name="should_be_floats",
    transform=_converting("to_f_default", to_f),
    options=_default_options("to_f"),
    default_option="to_f_default",
)

TO_NUMBERS = AttributeFilter(
    name="to_numbers",
    set_name="should_be_numbers",
    transform=_converting("to_num_default", to_number),
    options=_default_options("to_num", "to_number_default"),
    default_option="to_num_default",
)

TO_R = AttributeFilter(
    name="to_r",
    set_name="should_be_rationals",
    transform=_converting("to_r_default", to_r),
    options=_default_options("to_r"),
    default_option="to_r_default",
)

TO_B = AttributeFilter(
    name="to_b",
    set_name="should_be_boolean",
    transform=_converting("to_b_default", to_b),
    options=_default_options("to_b"),
    default_option="to_b_default",
    process_blank=True,
)
