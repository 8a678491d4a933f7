"""Generic algorithm applying a transformation to attributes from a set.

Every filter is a parametrization of :func:`filter_attributes_from_set`.
Attributes are taken from a named set, limited to those reported as changed
by the host model and to declared virtual attributes, and the value returned by the transformation replaces the
current value of each attribute.

Example:
    from attribute_filters.filtering import filter_attributes_from_set

    filter_attributes_from_set(
        user,
        "should_be_stripped",
        lambda value, context: value.strip(),
    )
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from attribute_filters._helper import is_blank, normalize_name
from attribute_filters.attribute_set import AttributeSet
from attribute_filters.host import (
    REGISTRY_ATTR,
    HostModel,
    accessible_names,
    ensure_host,
    virtual_names,
)

__all__ = (
    "FilterContext",
    "Transform",
    "attributes_to_filter",
    "filter_attributes_from_set",
    "for_each_attribute_from_set",
    "resolve_set",
)

logger = logging.getLogger(__name__)

SetOrName: TypeAlias = AttributeSet | str


@dataclass(frozen=True)
class FilterContext:
    """Information about the attribute being filtered."""

    model: Any = field(repr=False)
    set_name: str | None
    attribute: str
    previous: Any
    attribute_set: AttributeSet = field(repr=False)

    def annotation(self, *keys: Any) -> Any:
        """Read annotations of the filtered attribute within the set."""
        return self.attribute_set.annotation(self.attribute, *keys)

    def has_annotation(self, *keys: Any) -> bool:
        return self.attribute_set.has_annotation(self.attribute, *keys)


Transform: TypeAlias = Callable[[Any, FilterContext], Any]


def resolve_set(
    model: Any, set_or_name: SetOrName
) -> tuple[str | None, AttributeSet]:
    """Resolve a set name using the registry of the model class.

    Returns:
        tuple[str | None, AttributeSet]: The set name (None when a set object
            was given) and the set. Unknown names resolve to an empty set.
    """
    if isinstance(set_or_name, AttributeSet):
        return None, set_or_name
    name = normalize_name(set_or_name)
    registry = getattr(type(model), REGISTRY_ATTR, None)
    if registry is None:
        return name, AttributeSet().freeze()
    return name, registry.get_set(name)


def _candidates(
    host: HostModel,
    attribute_set: AttributeSet,
    process_all: bool,
    no_presence_check: bool,
) -> dict[str, Any]:
    if process_all:
        if no_presence_check:
            return {name: None for name in attribute_set}
        accessible = accessible_names(host)
        return {name: None for name in attribute_set if name in accessible}
    changes = host.changed_attributes()
    registry = getattr(type(host), REGISTRY_ATTR, None)
    if registry is None or registry.virtual_attributes_must_change:
        virtual = set()
    else:
        virtual = virtual_names(host, no_presence_check)
    return {
        name: changes.get(name)
        for name in attribute_set
        if name in changes or name in virtual
    }


def attributes_to_filter(
    model: Any,
    set_or_name: SetOrName,
    *,
    process_all: bool = False,
    no_presence_check: bool = False,
) -> dict[str, Any]:
    """Select attributes of a set that should be processed.

    Unless the registry asks for changed virtual attributes only, declared
    virtual attributes are selected even if the host does not report them
    as changed.

    Args:
        model (Any): The host model.
        set_or_name (SetOrName): A set name or an attribute set.
        process_all (bool, optional): Select every accessible member, not
            only the changed ones. Defaults to False.
        no_presence_check (bool, optional): Select members and virtual
            attributes without checking if they are accessible. Defaults to
            False.

    Returns:
        dict[str, Any]: Attribute names mapped to their previous values
            (None when process_all is set or for unchanged virtual attributes).

    Raises:
        IncompatibleModelError: If the model does not implement the host contract.
    """
    host = ensure_host(model)
    _, attribute_set = resolve_set(model, set_or_name)
    return _candidates(host, attribute_set, process_all, no_presence_check)


def _operate(
    model: Any,
    set_or_name: SetOrName,
    function: Transform,
    *,
    alter: bool,
    process_blank: bool,
    process_all: bool,
    no_presence_check: bool,
) -> None:
    host = ensure_host(model)
    set_name, attribute_set = resolve_set(model, set_or_name)
    candidates = _candidates(
        host, attribute_set, process_all, no_presence_check
    )
    if not candidates:
        return
    logger.debug(
        "Processing attributes %s of set %r on %s",
        ", ".join(candidates),
        set_name,
        type(model).__qualname__,
    )
    for attribute, previous in candidates.items():
        value = host.read_attribute(attribute)
        if not process_blank and is_blank(value):
            continue
        context = FilterContext(
            model=model,
            set_name=set_name,
            attribute=attribute,
            previous=value if process_all else previous,
            attribute_set=attribute_set,
        )
        result = function(value, context)
        if alter:
            host.write_attribute(attribute, result)


def filter_attributes_from_set(
    model: Any,
    set_or_name: SetOrName,
    transform: Transform,
    *,
    process_blank: bool = False,
    process_all: bool = False,
    no_presence_check: bool = False,
) -> None:
    """Replace values of attributes from a set with results of a transformation.

    Blank values (None, empty strings and empty containers) are skipped unless
    process_blank is set. If the transformation raises, the exception
    propagates and attributes processed before keep their new values.

    Args:
        model (Any): The host model.
        set_or_name (SetOrName): A set name or an attribute set.
        transform (Transform): Called with the current value and a
            FilterContext, returns the new value.
        process_blank (bool, optional): Also process blank values. Defaults to False.
        process_all (bool, optional): Process all accessible members, not only
            the changed ones. Defaults to False.
        no_presence_check (bool, optional): With process_all, do not check if
            members are accessible. Defaults to False.
    """
    _operate(
        model,
        set_or_name,
        transform,
        alter=True,
        process_blank=process_blank,
        process_all=process_all,
        no_presence_check=no_presence_check,
    )


def for_each_attribute_from_set(
    model: Any,
    set_or_name: SetOrName,
    callback: Callable[[Any, FilterContext], Any],
    *,
    process_blank: bool = False,
    process_all: bool = False,
    no_presence_check: bool = False,
) -> None:
    """Call a function for attributes from a set without writing the result.

    Selection of attributes is the same as in filter_attributes_from_set.
    """
    _operate(
        model,
        set_or_name,
        callback,
        alter=False,
        process_blank=process_blank,
        process_all=process_all,
        no_presence_check=no_presence_check,
    )
