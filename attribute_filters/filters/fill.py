from typing import Any

from attribute_filters._helper import each_element, is_blank, safe_copy
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter, option_aliases

__all__ = ("FILL",)


def fill(value: Any, context: FilterContext) -> Any:
    """Replace blank values with the ``fill_value`` annotation.

    Elements of lists, tuples and dictionaries are replaced one by one, so an
    empty container stays empty. With ``fill_any`` every element is replaced.
    """
    fill_value, fill_any = context.annotation("fill_value", "fill_any")

    def fill_element(element: Any) -> Any:
        if fill_any or is_blank(element):
            return safe_copy(fill_value)
        return element

    return each_element(value, fill_element)


FILL = AttributeFilter(
    name="fill",
    set_name="should_be_filled",
    transform=fill,
    options=option_aliases(
        fill_value=("with", "fill_with", "fill", "value", "content", "default"),
        fill_any=("fill_always", "always_fill", "always", "fill_present"),
    ),
    default_option="fill_value",
    process_blank=True,
)
