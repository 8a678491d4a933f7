from typing import Any

from attribute_filters._helper import each_element
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter

__all__ = ("STRIP",)


def strip(value: Any, context: FilterContext) -> Any:
    """Remove leading and trailing whitespace."""
    return each_element(value, str.strip, only=str)


STRIP = AttributeFilter(
    name="strip",
    set_name="should_be_stripped",
    transform=strip,
)
