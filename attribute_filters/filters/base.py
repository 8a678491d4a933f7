"""Implementation of AttributeFilter.

A filter binds a named attribute set to a transformation. Registering
attributes for a filter adds them to its set, translating the given options
into annotations read by the transformation.

Example:
    from attribute_filters.filters.base import AttributeFilter

    REDACT = AttributeFilter(
        name="redact",
        set_name="should_be_redacted",
        transform=lambda value, context: context.annotation("redact_with") or "***",
        options={"with": "redact_with", "redact_with": "redact_with"},
        default_option="redact_with",
    )

    REDACT.register(User.attribute_sets, "password", "token", with_="")
    REDACT.apply(user)
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from attribute_filters._helper import normalize_name
from attribute_filters.errors import UnknownOptionError
from attribute_filters.filtering import (
    Transform,
    filter_attributes_from_set,
    for_each_attribute_from_set,
)

if TYPE_CHECKING:
    from attribute_filters.registry import SetRegistry

__all__ = ("AttributeFilter", "option_aliases")


def option_aliases(**keys: Iterable[str]) -> dict[str, str]:
    """Build an alias table mapping every alias to its annotation key.

    The annotation key is always an alias of itself.
    """
    table: dict[str, str] = {}
    for key, aliases in keys.items():
        table[key] = key
        for alias in aliases:
            table[alias] = key
    return table


def _names(values: Iterable[Any]) -> Iterator[Any]:
    for value in values:
        if isinstance(value, (list, tuple, set, frozenset)):
            yield from _names(value)
        elif value is not None:
            yield value


@dataclass(frozen=True)
class AttributeFilter:
    """A transformation applied to the attributes of a named set."""

    name: str
    set_name: str
    transform: Transform = field(repr=False)
    options: Mapping[str, str] = field(default_factory=dict, repr=False)
    default_option: str | None = None
    process_blank: bool = False
    process_all: bool = False
    alter: bool = True
    converters: Mapping[str, Callable[[Any], Any]] = field(
        default_factory=dict, repr=False
    )

    def normalize_options(self, options: Any) -> dict[str, Any]:
        """Translate registration options into annotations.

        Values of keys having a converter are passed through it.

        Args:
            options (Any): A mapping of option names or aliases to values, or
                a scalar assigned to the default option. None and True mean
                no options.

        Returns:
            dict[str, Any]: Annotation keys mapped to values.

        Raises:
            UnknownOptionError: If an option is not known to the filter.
        """
        if options is None or options is True:
            return {}
        if not isinstance(options, Mapping):
            if self.default_option is None:
                raise UnknownOptionError(self.name, (repr(options),))
            options = {self.default_option: options}
        annotations: dict[str, Any] = {}
        unknown = []
        for option, value in options.items():
            option = normalize_name(option).rstrip("_")
            key = self.options.get(option)
            if key is None:
                unknown.append(option)
            else:
                converter = self.converters.get(key)
                annotations[key] = value if converter is None else converter(value)
        if unknown:
            raise UnknownOptionError(self.name, unknown)
        return annotations

    def register(
        self, registry: "SetRegistry", *names: Any, **options: Any
    ) -> None:
        """Add attributes to the set of the filter.

        Args:
            registry (SetRegistry): The registry of the model class.
            *names (Any): Attribute names, iterables of names or mappings of
                names to options (or to a scalar for the default option).
            **options (Any): Options shared by all the given names. Options
                given for a particular name take precedence.
        """
        shared = self.normalize_options(options)
        for name in _names(names):
            if isinstance(name, Mapping):
                for attribute, attribute_options in name.items():
                    annotations = dict(shared)
                    annotations.update(self.normalize_options(attribute_options))
                    registry.define_set(self.set_name, {attribute: annotations})
            else:
                registry.define_set(self.set_name, {name: shared})

    def apply(self, model: Any) -> None:
        """Filter attributes of the model belonging to the set of the filter.

        Filters which do not alter the attribute write results on their own.
        """
        operation = (
            filter_attributes_from_set
            if self.alter
            else for_each_attribute_from_set
        )
        operation(
            model,
            self.set_name,
            self.transform,
            process_blank=self.process_blank,
            process_all=self.process_all,
        )

    def __call__(self, model: Any) -> None:
        self.apply(model)
