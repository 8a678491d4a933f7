"""Composition of attribute filters into model classes.

A model class composes :class:`AttributeFilters` with a host providing the
contract of :class:`~attribute_filters.host.HostModel`. Every subclass owns a
registry of sets, started as a copy of the registry of its parent.

Example:
    from attribute_filters import AttributeFilters, SetRegistry, before_save
    from attribute_filters.hosts import TrackedObject

    class User(AttributeFilters, TrackedObject):
        attribute_sets = SetRegistry()
        attribute_sets.strip_attributes("username", "email")
        attribute_sets.downcase_attributes("email")

        @before_save
        def filter_before_save(self):
            self.filter_attributes()

    user = User(username=" jane ", email=" Jane@Example.COM")
    user.save()

    print(user.username, user.email)
    #> jane jane@example.com
"""

from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

from attribute_filters import filters
from attribute_filters.attribute_set import AttributeSet
from attribute_filters.filtering import (
    Transform,
    filter_attributes_from_set,
    for_each_attribute_from_set,
)
from attribute_filters.filters.base import AttributeFilter
from attribute_filters.host import REGISTRY_ATTR, ensure_host
from attribute_filters.query import AttributeQuery, SetQuery
from attribute_filters.registry import SetRegistry

__all__ = (
    "AttributeFilters",
    "before_save",
    "collect_hooks",
    "get_registry",
    "run_before_save",
)

HOOK_ATTR = "__before_save__"

F = TypeVar("F", bound=Callable[..., Any])


def before_save(function: F) -> F:
    """Mark a method to be called before the model is saved.

    Hooks are called in the order of definition, hooks of base classes first.
    """
    setattr(function, HOOK_ATTR, True)
    return function


def collect_hooks(cls: type) -> tuple[str, ...]:
    """Collect names of the before save hooks of a class.

    A method overridden without the decorator is no longer a hook.
    """
    hooks: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if getattr(value, HOOK_ATTR, False):
                hooks.pop(name, None)
                hooks[name] = None
            elif name in hooks:
                del hooks[name]
    return tuple(hooks)


def run_before_save(model: Any) -> None:
    for name in collect_hooks(type(model)):
        getattr(model, name)()


def get_registry(model: Any) -> SetRegistry:
    """Get the registry of a model class or instance.

    Returns an empty registry for classes without one.
    """
    cls = model if isinstance(model, type) else type(model)
    registry = getattr(cls, REGISTRY_ATTR, None)
    if registry is None:
        return SetRegistry()
    return registry


def _application(attribute_filter: AttributeFilter) -> Callable[[Any], None]:
    def apply(self: Any) -> None:
        attribute_filter.apply(self)

    apply.__name__ = f"{attribute_filter.name}_attributes"
    apply.__doc__ = (
        f"Apply the {attribute_filter.name} filter to attributes "
        f"from the {attribute_filter.set_name!r} set."
    )
    return apply


class AttributeFilters:
    """Mixin giving a model class attribute sets and filters."""

    attribute_sets: ClassVar[SetRegistry] = SetRegistry()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if REGISTRY_ATTR not in cls.__dict__:
            setattr(cls, REGISTRY_ATTR, get_registry(cls).copy())

    # Queries

    def attribute_set(self, name: Any = None) -> SetQuery:
        """Query a named set against this instance.

        Without a name the query covers members of all the sets.
        """
        registry = get_registry(self)
        if name is not None:
            return SetQuery(registry.get_set(name), self)
        result = AttributeSet()
        for attribute_set in registry.get_set().values():
            result = result | attribute_set
        return SetQuery(result, self)

    def attribute_set_simple(self, name: Any) -> AttributeSet:
        """Get a named set without wrapping it in a query."""
        return get_registry(self).get_set(name)

    def all_attributes(self) -> SetQuery:
        """Query all attributes accessible on this instance."""
        names = ensure_host(self).accessible_attribute_names()
        return SetQuery(AttributeSet(sorted(names)), self)

    def the_attribute(self, name: Any) -> AttributeQuery:
        return AttributeQuery(self, name)

    def attribute_sets_map(self) -> dict[str, AttributeSet]:
        """Get names of the sets indexed by their members."""
        return get_registry(self).attributes_to_sets()

    # Custom filtering

    def filter_attributes_that(
        self, set_or_name: Any, transform: Transform, **flags: bool
    ) -> None:
        """Filter attributes from a set with a custom transformation.

        Args:
            set_or_name (Any): A set name or an attribute set.
            transform (Transform): Called with the value and a FilterContext.
            **flags (bool): ``process_blank``, ``process_all`` and
                ``no_presence_check``.
        """
        filter_attributes_from_set(self, set_or_name, transform, **flags)

    def for_attributes_that(
        self,
        set_or_name: Any,
        callback: Callable[[Any, Any], Any],
        **flags: bool,
    ) -> None:
        for_each_attribute_from_set(self, set_or_name, callback, **flags)

    # Common filters

    strip_attributes = _application(filters.STRIP)
    downcase_attributes = _application(filters.DOWNCASE)
    upcase_attributes = _application(filters.UPCASE)
    capitalize_attributes = _application(filters.CAPITALIZE)
    fully_capitalize_attributes = _application(filters.FULLY_CAPITALIZE)
    titleize_attributes = _application(filters.TITLEIZE)
    fill_attributes = _application(filters.FILL)
    reverse_attributes = _application(filters.REVERSE)
    shuffle_attributes = _application(filters.SHUFFLE)
    squeeze_attributes = _application(filters.SQUEEZE)
    squish_attributes = _application(filters.SQUISH)
    pick_attributes = _application(filters.PICK)
    join_attributes = _application(filters.JOIN)
    split_attributes = _application(filters.SPLIT)
    convert_to_strings = _application(filters.TO_S)
    convert_to_integers = _application(filters.TO_I)
    convert_to_floats = _application(filters.TO_F)
    convert_to_numbers = _application(filters.TO_NUMBERS)
    convert_to_rationals = _application(filters.TO_R)
    convert_to_booleans = _application(filters.TO_B)

    def convert_attributes(self) -> None:
        """Apply all conversions."""
        filters.convert_attributes(self)

    def filter_attributes(self) -> None:
        """Apply the common filters in their fixed order."""
        filters.filter_attributes(self)
