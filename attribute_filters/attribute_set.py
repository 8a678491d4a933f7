"""Implementation of AttributeSet.

An attribute set is an ordered collection of unique attribute names. Each
member may carry annotations, a mapping of keys to arbitrary values that
parametrize how the attribute is treated by the filters using the set.

Example:
    from attribute_filters import AttributeSet

    names = AttributeSet("first_name", {"last_name": {"fill_value": "Doe"}})
    others = AttributeSet("last_name", "email")

    print(names & others)
    #> AttributeSet(['last_name+'])
    print((names & others).annotation("last_name", "fill_value"))
    #> Doe
"""

import copy
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Self

from attribute_filters._helper import (
    is_accessible_on,
    is_blank,
    merge_annotations,
    normalize_name,
    safe_copy,
)
from attribute_filters.errors import (
    FrozenAttributeSetError,
    InvalidAttributeError,
)

__all__ = ("AttributeSet",)

Annotations = dict[str, Any]


def _normalize_annotations(
    attribute: str, annotations: Any
) -> Annotations | None:
    if annotations is None or isinstance(annotations, bool):
        return None
    if not isinstance(annotations, Mapping):
        raise TypeError(
            f"Annotations for attribute {attribute!r} must be a mapping, got {annotations!r}"
        )
    return {normalize_name(key): value for key, value in annotations.items()}


class AttributeSet:
    """A set of attribute names with per-name annotations."""

    __slots__ = ("_members", "_annotations", "_frozen")

    _members: dict[str, None]
    _annotations: dict[str, Annotations]

    def __init__(self, *names: Any) -> None:
        self._members = {}
        self._annotations = {}
        self._frozen = False
        if names:
            self.add(*names)

    @classmethod
    def coerce(cls, value: Any) -> "AttributeSet":
        """Return the value if it is an AttributeSet; otherwise build one from it."""
        if isinstance(value, AttributeSet):
            return value
        return cls(value)

    # Mutability

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Self:
        """Make the set immutable.

        Returns:
            Self: The current set.
        """
        self._frozen = True
        return self

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise FrozenAttributeSetError(self)

    # Membership

    def _add_annotated(self, name: Any, annotations: Any) -> None:
        if is_blank(name):
            return
        name = normalize_name(name)
        self._members[name] = None
        incoming = _normalize_annotations(name, annotations)
        if not incoming:
            return
        current = self._annotations.get(name)
        if current:
            self._annotations[name] = merge_annotations(current, incoming)
        else:
            self._annotations[name] = copy.deepcopy(incoming)

    def add(self, *names: Any) -> Self:
        """Add attribute names to the set.

        Names can be given as strings, iterables of names, other attribute
        sets or mappings of names to annotations. Annotations already present
        in the set take precedence over the added ones.

        Returns:
            Self: The current set.

        Raises:
            FrozenAttributeSetError: If the set is frozen.
        """
        self._ensure_mutable()
        for name in names:
            if isinstance(name, AttributeSet):
                for member in name:
                    self._add_annotated(member, name._annotations.get(member))
            elif isinstance(name, Mapping):
                for member, annotations in name.items():
                    self._add_annotated(member, annotations)
            elif isinstance(name, Iterable) and not isinstance(
                name, (str, bytes)
            ):
                self.add(*name)
            else:
                self._add_annotated(name, None)
        return self

    def discard(self, *names: Any) -> Self:
        """Remove attribute names and their annotations from the set."""
        self._ensure_mutable()
        for name in names:
            name = normalize_name(name)
            self._members.pop(name, None)
            self._annotations.pop(name, None)
        return self

    @property
    def members(self) -> tuple[str, ...]:
        return tuple(self._members)

    def __contains__(self, name: Any) -> bool:
        if is_blank(name):
            return False
        return normalize_name(name) in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._members))

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    # Annotations

    def annotate(self, name: Any, key: Any, value: Any) -> None:
        """Add an annotation to a member of the set.

        Args:
            name (Any): The attribute name.
            key (Any): The annotation key.
            value (Any): The annotation value.

        Raises:
            InvalidAttributeError: If the attribute is not a member of the set.
            FrozenAttributeSetError: If the set is frozen.
        """
        self._ensure_mutable()
        name = normalize_name(name)
        if name not in self._members:
            raise InvalidAttributeError(name)
        self._annotations.setdefault(name, {})[normalize_name(key)] = value

    def annotation(self, name: Any, *keys: Any) -> Any:
        """Get annotations of a member.

        Args:
            name (Any): The attribute name.
            *keys (Any): Optional annotation keys.

        Returns:
            Any: A copy of all annotations of the member when no key is given,
                the value of the annotation for a single key or a tuple of
                values for multiple keys. Missing values are None.
        """
        group = None
        if not is_blank(name) and self._annotations:
            group = self._annotations.get(normalize_name(name))
        if not keys:
            if group is None:
                return None
            return {key: safe_copy(value) for key, value in group.items()}
        group = group or {}
        values = tuple(safe_copy(group.get(normalize_name(key))) for key in keys)
        if len(values) == 1:
            return values[0]
        return values

    def has_annotations(self) -> bool:
        return bool(self._annotations)

    def has_annotation(self, name: Any = None, *keys: Any) -> bool:
        """Check if the set, a member or any of the member's keys is annotated."""
        if not self._annotations:
            return False
        if name is None:
            return True
        group = self._annotations.get(normalize_name(name))
        if not group:
            return False
        if not keys:
            return True
        return any(normalize_name(key) in group for key in keys)

    def delete_annotation(self, name: Any, key: Any = None) -> Any:
        """Delete a single annotation or all annotations of a member.

        Returns:
            Any: The removed value, the removed annotations mapping or None.
        """
        self._ensure_mutable()
        if is_blank(name):
            return None
        name = normalize_name(name)
        if key is None:
            return self._annotations.pop(name, None)
        group = self._annotations.get(name)
        if group is None:
            return None
        removed = group.pop(normalize_name(key), None)
        if not group:
            del self._annotations[name]
        return removed

    def remove_annotations(self) -> None:
        """Remove all annotations, keeping the members."""
        self._ensure_mutable()
        self._annotations = {}

    def annotations(self) -> dict[str, Annotations]:
        """Return a deep copy of all annotations indexed by member."""
        return copy.deepcopy(self._annotations)

    # Set algebra

    def _build(
        self, names: Iterable[str], source: Callable[[str], Annotations | None]
    ) -> "AttributeSet":
        result = AttributeSet()
        for name in names:
            result._members[name] = None
            annotations = source(name)
            if annotations:
                result._annotations[name] = copy.deepcopy(annotations)
        return result

    def union(self, other: Any) -> "AttributeSet":
        """Return members of both sets.

        Annotations of members present in both sets are deep merged and the
        values of this set win on conflicting keys.
        """
        other = AttributeSet.coerce(other)

        def source(name: str) -> Annotations | None:
            mine = self._annotations.get(name)
            theirs = other._annotations.get(name)
            if mine and theirs:
                return merge_annotations(mine, theirs)
            return mine or theirs

        return self._build(
            _unique(self._members, other._members), source
        )

    def intersection(self, other: Any) -> "AttributeSet":
        """Return members present in both sets with annotations of this set."""
        other = AttributeSet.coerce(other)
        return self._build(
            (name for name in self._members if name in other._members),
            self._annotations.get,
        )

    def difference(self, other: Any) -> "AttributeSet":
        """Return members not present in the other set."""
        other = AttributeSet.coerce(other)
        return self._build(
            (name for name in self._members if name not in other._members),
            self._annotations.get,
        )

    def symmetric_difference(self, other: Any) -> "AttributeSet":
        """Return members present in exactly one of the sets.

        Each member keeps the annotations of the set it comes from.
        """
        other = AttributeSet.coerce(other)
        names = [name for name in self._members if name not in other._members]
        names.extend(
            name for name in other._members if name not in self._members
        )

        def source(name: str) -> Annotations | None:
            if name in self._members:
                return self._annotations.get(name)
            return other._annotations.get(name)

        return self._build(names, source)

    __or__ = union
    __add__ = union
    __and__ = intersection
    __sub__ = difference
    __xor__ = symmetric_difference

    def __ror__(self, other: Any) -> "AttributeSet":
        return AttributeSet.coerce(other).union(self)

    __radd__ = __ror__

    def __rand__(self, other: Any) -> "AttributeSet":
        return AttributeSet.coerce(other).intersection(self)

    def __rsub__(self, other: Any) -> "AttributeSet":
        return AttributeSet.coerce(other).difference(self)

    def __rxor__(self, other: Any) -> "AttributeSet":
        return AttributeSet.coerce(other).symmetric_difference(self)

    def duplicate(self) -> "AttributeSet":
        """Return a mutable deep copy of the set."""
        return self._build(self._members, self._annotations.get)

    copy = duplicate

    def __copy__(self) -> "AttributeSet":
        return self.duplicate()

    def __deepcopy__(self, memo: dict) -> "AttributeSet":
        return self.duplicate()

    # Filtering

    def delete_if(self, predicate: Callable[[str], bool]) -> Self:
        """Remove members for which the predicate returns True."""
        self._ensure_mutable()
        for name in tuple(self._members):
            if predicate(name):
                del self._members[name]
                self._annotations.pop(name, None)
        return self

    def keep_if(self, predicate: Callable[[str], bool]) -> Self:
        """Keep only members for which the predicate returns True."""
        return self.delete_if(lambda name: not predicate(name))

    def select(self, predicate: Callable[[str], bool]) -> "AttributeSet":
        return self._build(
            (name for name in self._members if predicate(name)),
            self._annotations.get,
        )

    def reject(self, predicate: Callable[[str], bool]) -> "AttributeSet":
        return self.select(lambda name: not predicate(name))

    def select_accessible(self, model: Any) -> "AttributeSet":
        """Return members which can be read and written on the model."""
        return self.select(lambda name: is_accessible_on(model, name))

    # Comparison and representation

    def to_dict(self) -> dict[str, Any]:
        """Return the set as a mapping of member to annotations or True."""
        return {
            name: copy.deepcopy(self._annotations[name])
            if name in self._annotations
            else True
            for name in self._members
        }

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeSet):
            return (
                self._members.keys() == other._members.keys()
                and self._annotations == other._annotations
            )
        if isinstance(other, Mapping):
            expected = {
                normalize_name(name): True
                if value is None or value is True or value == {}
                else value
                for name, value in other.items()
            }
            return self.to_dict() == expected
        if isinstance(other, (set, frozenset)):
            return not self._annotations and self._members.keys() == {
                normalize_name(name) for name in other
            }
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        names = [
            f"{name}+" if name in self._annotations else name
            for name in self._members
        ]
        return f"{type(self).__name__}({names!r})"


def _unique(*iterables: Iterable[str]) -> Iterator[str]:
    seen: set[str] = set()
    for iterable in iterables:
        for name in iterable:
            if name not in seen:
                seen.add(name)
                yield name
