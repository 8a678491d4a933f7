import copy
from collections.abc import Callable, Mapping, MutableMapping, MutableSequence
from collections.abc import MutableSet, Sized
from typing import Any

_MUTABLE_CONTAINERS = (MutableMapping, MutableSequence, MutableSet)


def normalize_name(name: Any) -> str:
    """Convert an attribute, set or annotation name to its canonical form."""
    if isinstance(name, str):
        return name
    return str(name)


def is_blank(value: Any) -> bool:
    """Check if a value is blank.

    Args:
        value (Any): Any value.

    Returns:
        bool: True for None, an empty string or an empty container; otherwise False.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_present(value: Any) -> bool:
    return not is_blank(value)


def safe_copy(value: Any) -> Any:
    """Shallow copy mutable containers, return anything else as is."""
    if isinstance(value, _MUTABLE_CONTAINERS):
        return copy.copy(value)
    return value


def merge_annotations(
    mine: Mapping[str, Any], theirs: Mapping[str, Any]
) -> dict[str, Any]:
    """Deep merge two annotation mappings.

    The result is a deep copy of ``theirs`` overlaid with ``mine``, so values
    from ``mine`` win every conflict. Nested mappings are merged recursively.
    """
    result: dict[str, Any] = copy.deepcopy(dict(theirs))
    for key, value in mine.items():
        other = result.get(key)
        if isinstance(value, Mapping) and isinstance(other, Mapping):
            result[key] = merge_annotations(value, other)
        else:
            result[key] = copy.deepcopy(value)
    return result


def each_element(
    value: Any,
    function: Callable[[Any], Any],
    only: type | tuple[type, ...] | None = None,
) -> Any:
    """Apply a function to a value or to each element of a container.

    Lists and tuples are mapped element by element, dictionaries have their
    values mapped. When ``only`` is given, elements that are not instances of
    it are passed through unchanged.
    """

    def apply(element: Any) -> Any:
        if only is not None and not isinstance(element, only):
            return element
        return function(element)

    if isinstance(value, (list, tuple)):
        return type(value)(apply(element) for element in value)
    if isinstance(value, dict):
        return {key: apply(element) for key, element in value.items()}
    return apply(value)


def has_accessors(obj: Any, name: str) -> bool:
    """Check if an object has both a getter and a setter for an attribute."""
    attribute = getattr(type(obj), name, None)
    if isinstance(attribute, property):
        return attribute.fget is not None and attribute.fset is not None
    if callable(attribute):
        return False
    return hasattr(obj, name)


def is_accessible_on(obj: Any, name: str) -> bool:
    """Check if an attribute can be read and written on an object."""
    accessible = getattr(obj, "accessible_attribute_names", None)
    if callable(accessible) and name in accessible():
        return True
    return has_accessors(obj, name)
