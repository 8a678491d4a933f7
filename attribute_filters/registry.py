"""Registry of named attribute sets declared for a model class.

Example:
    from attribute_filters import SetRegistry

    sets = SetRegistry()
    sets.define_set("should_be_stripped", "email", "real_name")
    sets.define_set({"should_be_filled": {"nickname": {"fill_value": "anon"}}})
    sets.add_attribute_to_sets("username", "should_be_stripped")

    print(sets.get_set("should_be_stripped"))
    #> AttributeSet(['email', 'real_name', 'username'])
    print(sets.sets_of("username"))
    #> AttributeSet(['should_be_stripped'])
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from attribute_filters._helper import is_blank, normalize_name
from attribute_filters.attribute_set import AttributeSet
from attribute_filters.errors import InvalidAttributeError
from attribute_filters.filters import (
    CAPITALIZE,
    DOWNCASE,
    FILL,
    FULLY_CAPITALIZE,
    PICK,
    REVERSE,
    SHUFFLE,
    SQUEEZE,
    SQUISH,
    STRIP,
    TITLEIZE,
    TO_B,
    TO_F,
    TO_I,
    TO_NUMBERS,
    TO_R,
    TO_S,
    UPCASE,
)
from attribute_filters.filters.base import AttributeFilter
from attribute_filters.filters.join import register_join
from attribute_filters.filters.split import register_split

__all__ = ("SetRegistry",)

logger = logging.getLogger(__name__)


def _flatten(values: Iterable[Any]) -> Iterator[Any]:
    for value in values:
        if isinstance(value, (list, tuple, set, frozenset)):
            yield from _flatten(value)
        elif value is not None:
            yield value


class SetRegistry:
    """Named attribute sets of a model class.

    Stored sets are frozen. Every modification builds a new set that
    replaces the stored one, so sets handed out earlier never change.
    """

    __slots__ = ("_sets", "_virtual", "_virtual_must_change")

    _sets: dict[str, AttributeSet]

    def __init__(
        self,
        sets: Mapping[str, Any] | None = None,
        *,
        virtual_attributes: Iterable[str] = (),
    ) -> None:
        self._sets = {}
        self._virtual = AttributeSet(virtual_attributes).freeze()
        self._virtual_must_change = False
        if sets:
            self.define_set(sets)

    def copy(self) -> "SetRegistry":
        """Create an independent registry containing the same sets."""
        registry = SetRegistry(virtual_attributes=self._virtual)
        registry._sets = dict(self._sets)
        registry._virtual_must_change = self._virtual_must_change
        return registry

    def _store(self, name: str, attribute_set: AttributeSet) -> None:
        self._sets[name] = attribute_set.freeze()

    def _modify(self, name: Any) -> tuple[str, AttributeSet]:
        name = normalize_name(name)
        current = self._sets.get(name)
        return name, current.duplicate() if current else AttributeSet()

    # Declarations

    def define_set(self, name: Any, *members: Any) -> None:
        """Add attributes to a named set, creating it if needed.

        Args:
            name (Any): The name of the set, or a mapping of set names to
                members which defines multiple sets at once.
            *members (Any): Attribute names, iterables of names or mappings of
                names to annotations. When ``name`` is a mapping they are
                added to every set from it.

        Repeated definitions accumulate. Annotations already registered win
        over newly given ones.
        """
        if isinstance(name, Mapping):
            for set_name, set_members in name.items():
                self.define_set(set_name, set_members, *members)
            return
        set_name, attribute_set = self._modify(name)
        attribute_set.add(*members)
        self._store(set_name, attribute_set)
        logger.debug(
            "Defined attribute set %r: %r", set_name, self._sets[set_name]
        )

    def add_attribute_to_sets(self, attribute: Any, *set_names: Any) -> None:
        """Add an attribute to named sets.

        Args:
            attribute (Any): The attribute name or a mapping of attribute
                names to set names.
            *set_names (Any): Set names. An element may be a mapping of set
                name to annotations for the attribute within that set.
        """
        if isinstance(attribute, Mapping):
            for attribute_name, names in attribute.items():
                self.add_attribute_to_sets(attribute_name, names, *set_names)
            return
        attribute = normalize_name(attribute)
        for set_name in _flatten(set_names):
            if isinstance(set_name, Mapping):
                for name, annotations in set_name.items():
                    self.define_set(name, {attribute: annotations})
            else:
                self.define_set(set_name, attribute)

    def annotate_set(
        self, set_name: Any, attribute: Any, key: Any, value: Any
    ) -> None:
        """Set an annotation of an attribute within a named set.

        Raises:
            InvalidAttributeError: If the attribute is not a member of the set.
        """
        name, attribute_set = self._modify(set_name)
        try:
            attribute_set.annotate(attribute, key, value)
        except InvalidAttributeError as exc:
            raise InvalidAttributeError(exc.attribute, name) from None
        self._store(name, attribute_set)

    def annotate_set_members(self, set_name: Any, key: Any, value: Any) -> None:
        """Set the same annotation for every member of a named set."""
        name, attribute_set = self._modify(set_name)
        for attribute in attribute_set:
            attribute_set.annotate(attribute, key, value)
        self._store(name, attribute_set)

    def annotate_sets(self, annotations: Mapping[Any, Any]) -> None:
        """Annotate in batch using ``{set_name: {attribute: {key: value}}}``."""
        for set_name, attributes in annotations.items():
            for attribute, values in attributes.items():
                for key, value in values.items():
                    self.annotate_set(set_name, attribute, key, value)

    def delete_annotation(
        self, set_name: Any, attribute: Any, key: Any = None
    ) -> Any:
        """Delete annotations of an attribute within a named set."""
        name = normalize_name(set_name)
        if name not in self._sets:
            return None
        name, attribute_set = self._modify(name)
        removed = attribute_set.delete_annotation(attribute, key)
        self._store(name, attribute_set)
        return removed

    def remove_from_set(self, set_name: Any, *attributes: Any) -> None:
        name = normalize_name(set_name)
        if name not in self._sets:
            return
        name, attribute_set = self._modify(name)
        attribute_set.discard(*_flatten(attributes))
        self._store(name, attribute_set)

    def delete_set(self, set_name: Any) -> AttributeSet | None:
        return self._sets.pop(normalize_name(set_name), None)

    def store_set(self, set_name: Any, attribute_set: AttributeSet) -> None:
        """Replace a named set with a copy of the given set."""
        self._store(normalize_name(set_name), attribute_set.duplicate())

    def treat_as_real(self, *attributes: Any) -> None:
        """Mark attributes with accessors but no backing field as present."""
        virtual = self._virtual.duplicate()
        virtual.add(*_flatten(attributes))
        self._virtual = virtual.freeze()

    @property
    def virtual_attributes(self) -> AttributeSet:
        return self._virtual

    def filter_virtual_attributes_that_changed(self) -> None:
        """Filter virtual attributes only when the host reports them as changed.

        By default virtual attributes having both accessors are filtered on
        every pass, whether changed or not.
        """
        self._virtual_must_change = True

    @property
    def virtual_attributes_must_change(self) -> bool:
        return self._virtual_must_change

    # Lookups

    def get_set(self, name: Any = None) -> Any:
        """Get a named set or all sets.

        Args:
            name (Any, optional): The name of the set. Defaults to None.

        Returns:
            Any: A read-only mapping of all sets when name is not given;
                otherwise the frozen set, or a frozen empty set if no set of
                that name is defined.
        """
        if name is None:
            return MappingProxyType(self._sets)
        if is_blank(name):
            return AttributeSet().freeze()
        found = self._sets.get(normalize_name(name))
        if found is None:
            return AttributeSet().freeze()
        return found

    def __getitem__(self, name: Any) -> AttributeSet:
        return self.get_set(name)

    def __contains__(self, name: Any) -> bool:
        return not is_blank(name) and normalize_name(name) in self._sets

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._sets))

    def __len__(self) -> int:
        return len(self._sets)

    def names(self) -> tuple[str, ...]:
        return tuple(self._sets)

    def sets_of(self, attribute: Any) -> AttributeSet:
        """Get names of the sets containing the attribute."""
        return AttributeSet(
            name
            for name, attribute_set in self._sets.items()
            if attribute in attribute_set
        ).freeze()

    def attributes_to_sets(self) -> dict[str, AttributeSet]:
        """Get names of the sets indexed by names of their members."""
        result: dict[str, AttributeSet] = {}
        for name, attribute_set in self._sets.items():
            for attribute in attribute_set:
                result.setdefault(attribute, AttributeSet()).add(name)
        return {
            attribute: set_names.freeze()
            for attribute, set_names in result.items()
        }

    # Filter declarations

    def register_filter(
        self, attribute_filter: AttributeFilter, *args: Any, **options: Any
    ) -> None:
        attribute_filter.register(self, *args, **options)

    def strip_attributes(self, *args: Any) -> None:
        """Register attributes that should be stripped."""
        STRIP.register(self, *args)

    def downcase_attributes(self, *args: Any) -> None:
        DOWNCASE.register(self, *args)

    def upcase_attributes(self, *args: Any) -> None:
        UPCASE.register(self, *args)

    def capitalize_attributes(self, *args: Any) -> None:
        CAPITALIZE.register(self, *args)

    def fully_capitalize_attributes(self, *args: Any) -> None:
        FULLY_CAPITALIZE.register(self, *args)

    def titleize_attributes(self, *args: Any) -> None:
        TITLEIZE.register(self, *args)

    def fill_attributes(self, *args: Any, **options: Any) -> None:
        """Register attributes that should be filled when blank.

        Example:
            sets.fill_attributes("nickname", value="anonymous")
            sets.fill_attributes({"title": {"value": "-", "always": True}})
        """
        FILL.register(self, *args, **options)

    def reverse_attributes(self, *args: Any, **options: Any) -> None:
        REVERSE.register(self, *args, **options)

    def shuffle_attributes(self, *args: Any, **options: Any) -> None:
        SHUFFLE.register(self, *args, **options)

    def squeeze_attributes(self, *args: Any, **options: Any) -> None:
        SQUEEZE.register(self, *args, **options)

    def squish_attributes(self, *args: Any) -> None:
        SQUISH.register(self, *args)

    def pick_attributes(self, *args: Any, **options: Any) -> None:
        PICK.register(self, *args, **options)

    def join_attribute(
        self, attribute: Any, parameters: Any = None, **options: Any
    ) -> None:
        """Register an attribute that should be joined from other attributes.

        Example:
            sets.join_attribute("real_name", ["first_name", "last_name"])
            sets.join_attribute(["first_name", "last_name"], into="real_name")
        """
        register_join(self, attribute, parameters, **options)

    join_attributes = join_attribute

    def split_attribute(
        self, attribute: Any, parameters: Any = None, **options: Any
    ) -> None:
        """Register an attribute that should be split into other attributes.

        Example:
            sets.split_attribute(
                "real_name", into=["first_name", "last_name"], limit=2
            )
        """
        register_split(self, attribute, parameters, **options)

    split_attributes = split_attribute

    def convert_to_strings(self, *args: Any, **options: Any) -> None:
        TO_S.register(self, *args, **options)

    def convert_to_integers(self, *args: Any, **options: Any) -> None:
        TO_I.register(self, *args, **options)

    def convert_to_floats(self, *args: Any, **options: Any) -> None:
        TO_F.register(self, *args, **options)

    def convert_to_numbers(self, *args: Any, **options: Any) -> None:
        TO_NUMBERS.register(self, *args, **options)

    def convert_to_rationals(self, *args: Any, **options: Any) -> None:
        TO_R.register(self, *args, **options)

    def convert_to_booleans(self, *args: Any, **options: Any) -> None:
        TO_B.register(self, *args, **options)

    def __repr__(self) -> str:
        return f"SetRegistry({dict(self._sets)!r})"
