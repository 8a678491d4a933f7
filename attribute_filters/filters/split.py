"""Filter splitting a value into other attributes.

Example:
    class User(AttributeFilters, TrackedObject):
        attribute_sets = SetRegistry()
        attribute_sets.split_attribute(
            "real_name", into=["first_name", "last_name"], limit=2
        )

    user = User(real_name="Jane Mary Doe")
    user.split_attributes()

    print(user.first_name, "|", user.last_name)
    #> Jane | Mary Doe
"""

import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from attribute_filters._helper import each_element, is_blank
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter, option_aliases

if TYPE_CHECKING:
    from attribute_filters.registry import SetRegistry

__all__ = ("SPLIT", "register_split")


def _split(text: str, pattern: Any, limit: int | None) -> list[str]:
    maxsplit = limit - 1 if limit and limit > 0 else -1
    if isinstance(pattern, re.Pattern):
        return pattern.split(text, max(maxsplit, 0))
    if pattern is None or pattern == " ":
        return text.split(None, maxsplit)
    if pattern == "":
        if maxsplit < 0 or len(text) <= maxsplit:
            return list(text)
        return [*text[:maxsplit], text[maxsplit:]]
    return text.split(pattern, maxsplit)


def _flatten(values: list[Any]) -> list[Any]:
    result = []
    for value in values:
        if isinstance(value, (list, tuple)):
            result.extend(_flatten(value))
        else:
            result.append(value)
    return result


def split(value: Any, context: FilterContext) -> None:
    """Split the value and write the parts.

    The n-th part is written to the n-th ``split_into`` attribute, missing
    parts are written as None. Without destinations the list of parts
    replaces the value of the attribute.
    """
    pattern, limit, flatten, into = context.annotation(
        "split_pattern", "split_limit", "split_flatten", "split_into"
    )
    parts = each_element(
        value, lambda text: _split(text, pattern, limit), only=str
    )
    if not isinstance(parts, list):
        parts = list(parts) if isinstance(parts, tuple) else [parts]
    if flatten:
        parts = _flatten(parts)

    model = context.model
    if is_blank(into):
        model.write_attribute(context.attribute, parts)
        return
    for index, destination in enumerate(into):
        model.write_attribute(
            destination, parts[index] if index < len(parts) else None
        )


SPLIT = AttributeFilter(
    name="split",
    set_name="should_be_splitted",
    transform=split,
    options=option_aliases(
        split_pattern=("with", "pattern"),
        split_into=("into", "to", "destination"),
        split_limit=("limit",),
        split_flatten=("flatten",),
    ),
    default_option="split_into",
    alter=False,
)


def register_split(
    registry: "SetRegistry",
    attribute: Any,
    parameters: Any = None,
    **options: Any,
) -> None:
    """Register an attribute whose value is split into other attributes.

    Args:
        registry (SetRegistry): The registry of the model class.
        attribute (Any): The source attribute or a mapping of source
            attributes to parameters.
        parameters (Any, optional): A mapping of options, or the destination
            attributes. Defaults to None.
        **options (Any): Options: ``pattern`` (``with``), ``limit``,
            ``flatten`` and ``into`` (``to``, ``destination``).

    Raises:
        UnknownOptionError: If an option is not known.
    """
    if isinstance(attribute, Mapping):
        for name, attribute_parameters in attribute.items():
            register_split(registry, name, attribute_parameters, **options)
        return
    annotations = SPLIT.normalize_options(parameters)
    annotations.update(SPLIT.normalize_options(options))

    limit = annotations.get("split_limit")
    if not is_blank(limit):
        annotations["split_limit"] = int(limit)
    into = annotations.get("split_into")
    if is_blank(into):
        annotations["split_into"] = None
    elif isinstance(into, str) or not isinstance(into, Iterable):
        annotations["split_into"] = [into]
    else:
        annotations["split_into"] = list(into)

    registry.define_set(SPLIT.set_name, attribute)
    for key, value in annotations.items():
        registry.annotate_set(SPLIT.set_name, attribute, key, value)
