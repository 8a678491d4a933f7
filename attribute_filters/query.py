"""Query objects evaluating attribute sets against a model instance.

A query works on its own copy of the set, so chained queries never change the
sets declared for the model class. Changes made through a query are kept
local until :meth:`SetQuery.persist` writes them back to a registry.

Example:
    from attribute_filters.query import SetQuery

    query = SetQuery(User.attribute_sets["should_be_stripped"], user)

    print(query.all_satisfy("present"))
    #> True
    print(query.select("isupper").members)
    #> ('username',)
    print(user.the_attribute("email").is_member_of("should_be_stripped"))
    #> True
"""

from collections.abc import Callable, Iterator
from typing import Any

from attribute_filters._helper import is_blank, is_present, normalize_name
from attribute_filters.attribute_set import AttributeSet
from attribute_filters.host import REGISTRY_ATTR, accessible_names, ensure_host

__all__ = ("SetQuery", "AttributeQuery", "PREDICATES", "read_value")

Predicate = Callable[[Any], Any]

PREDICATES: dict[str, Predicate] = {
    "present": is_present,
    "blank": is_blank,
    "none": lambda value: value is None,
    "truthy": bool,
    "falsy": lambda value: not value,
}


def _resolve_predicate(predicate: Predicate | str) -> Predicate:
    if callable(predicate):
        return predicate
    name = normalize_name(predicate)
    registered = PREDICATES.get(name)
    if registered is not None:
        return registered

    def call_method(value: Any) -> bool:
        method = getattr(value, name, None)
        return callable(method) and bool(method())

    return call_method


def read_value(model: Any, name: str) -> Any:
    """Read an attribute of a model, returning None if it cannot be read."""
    reader = getattr(model, "read_attribute", None)
    try:
        if callable(reader):
            return reader(name)
        return getattr(model, name)
    except AttributeError:
        return None


def _registry_of(model: Any) -> Any:
    return getattr(type(model), REGISTRY_ATTR, None)


class SetQuery:
    """An attribute set bound to a model instance."""

    __slots__ = ("_set", "_model")

    def __init__(self, attribute_set: Any, model: Any) -> None:
        self._set = AttributeSet.coerce(attribute_set).duplicate()
        self._model = model

    def _derive(self, attribute_set: AttributeSet) -> "SetQuery":
        return SetQuery(attribute_set, self._model)

    def _items(self) -> Iterator[tuple[str, Any]]:
        for name in self._set:
            yield name, read_value(self._model, name)

    @property
    def model(self) -> Any:
        return self._model

    # Predicates over values

    def all_satisfy(self, predicate: Predicate | str) -> bool:
        """Check if values of all the attributes satisfy the predicate.

        Args:
            predicate (Predicate | str): A callable receiving the value, the
                name of a registered predicate (``present``, ``blank``,
                ``none``, ``truthy``, ``falsy``) or the name of a method of
                the value taking no arguments.

        Returns:
            bool: True if every value satisfies the predicate; True for an
                empty set.
        """
        check = _resolve_predicate(predicate)
        return all(check(value) for _, value in self._items())

    def any_satisfy(self, predicate: Predicate | str) -> bool:
        check = _resolve_predicate(predicate)
        return any(check(value) for _, value in self._items())

    def none_satisfy(self, predicate: Predicate | str) -> bool:
        return not self.any_satisfy(predicate)

    def one_satisfies(self, predicate: Predicate | str) -> bool:
        check = _resolve_predicate(predicate)
        return sum(1 for _, value in self._items() if check(value)) == 1

    def select(self, predicate: Predicate | str) -> "SetQuery":
        """Narrow the query to attributes whose values satisfy the predicate."""
        check = _resolve_predicate(predicate)
        matching = {name for name, value in self._items() if check(value)}
        return self._derive(self._set.select(matching.__contains__))

    def reject(self, predicate: Predicate | str) -> "SetQuery":
        check = _resolve_predicate(predicate)
        matching = {name for name, value in self._items() if check(value)}
        return self._derive(self._set.reject(matching.__contains__))

    # Predicates over changes

    def changed(self) -> "SetQuery":
        """Narrow the query to attributes reported as changed by the model."""
        changes = ensure_host(self._model).changed_attributes()
        return self._derive(self._set.select(changes.__contains__))

    def any_changed(self) -> bool:
        return bool(self.changed())

    def all_unchanged(self) -> bool:
        return not self.any_changed()

    # Values

    def values(self) -> list[Any]:
        """Values of the attributes in set order, None for unreadable ones."""
        return [value for _, value in self._items()]

    def values_dict(self) -> dict[str, Any]:
        return dict(self._items())

    # Set views

    @property
    def members(self) -> tuple[str, ...]:
        return self._set.members

    @property
    def attribute_set(self) -> AttributeSet:
        return self._set.duplicate()

    def __contains__(self, name: Any) -> bool:
        return name in self._set

    def __iter__(self) -> Iterator[str]:
        return iter(self._set)

    def __len__(self) -> int:
        return len(self._set)

    def __bool__(self) -> bool:
        return bool(self._set)

    def annotation(self, name: Any, *keys: Any) -> Any:
        return self._set.annotation(name, *keys)

    def has_annotation(self, name: Any = None, *keys: Any) -> bool:
        return self._set.has_annotation(name, *keys)

    def accessible(self) -> "SetQuery":
        return self._derive(self._set.select_accessible(self._model))

    # Set algebra

    @staticmethod
    def _operand(other: Any) -> Any:
        if isinstance(other, SetQuery):
            return other._set
        return other

    def union(self, other: Any) -> "SetQuery":
        return self._derive(self._set.union(self._operand(other)))

    def intersection(self, other: Any) -> "SetQuery":
        return self._derive(self._set.intersection(self._operand(other)))

    def difference(self, other: Any) -> "SetQuery":
        return self._derive(self._set.difference(self._operand(other)))

    def symmetric_difference(self, other: Any) -> "SetQuery":
        return self._derive(
            self._set.symmetric_difference(self._operand(other))
        )

    __or__ = union
    __add__ = union
    __and__ = intersection
    __sub__ = difference
    __xor__ = symmetric_difference

    # Local changes

    def annotate(self, name: Any, key: Any, value: Any) -> "SetQuery":
        """Annotate a member within this query only."""
        self._set.annotate(name, key, value)
        return self

    def delete_annotation(self, name: Any, key: Any = None) -> Any:
        return self._set.delete_annotation(name, key)

    def persist(self, registry: Any, name: Any) -> None:
        """Replace a named set of the registry with the set of this query."""
        registry.store_set(name, self._set)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SetQuery):
            return self._set == other._set
        return self._set == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SetQuery({list(self._set.members)!r}, model={type(self._model).__qualname__})"


class AttributeQuery:
    """A single attribute of a model instance."""

    __slots__ = ("_model", "_name")

    def __init__(self, model: Any, attribute: Any) -> None:
        self._model = model
        self._name = normalize_name(attribute)

    @property
    def name(self) -> str:
        return self._name

    def sets(self) -> AttributeSet:
        """Names of the sets containing the attribute."""
        registry = _registry_of(self._model)
        if registry is None:
            return AttributeSet().freeze()
        return registry.sets_of(self._name)

    def is_member_of(self, set_name: Any) -> bool:
        registry = _registry_of(self._model)
        return registry is not None and self._name in registry.get_set(set_name)

    in_set = is_member_of
    belongs_to = is_member_of

    def __contains__(self, set_name: Any) -> bool:
        return self.is_member_of(set_name)

    def value(self) -> Any:
        return read_value(self._model, self._name)

    def is_accessible(self) -> bool:
        return self._name in accessible_names(ensure_host(self._model))

    def is_virtual(self) -> bool:
        registry = _registry_of(self._model)
        return registry is not None and self._name in registry.virtual_attributes

    def is_changed(self) -> bool:
        return self._name in ensure_host(self._model).changed_attributes()

    def is_unchanged(self) -> bool:
        return not self.is_changed()

    def __repr__(self) -> str:
        return f"AttributeQuery({self._name!r}, model={type(self._model).__qualname__})"
