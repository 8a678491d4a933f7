"""Module containing errors classes."""

from collections.abc import Iterable
from typing import Any


class AttributeFiltersError(Exception):
    """Base class for all attribute filters errors."""

    pass


class ConfigurationError(AttributeFiltersError):
    """Base class for errors in declarations of sets and filters."""

    pass


class InvalidAttributeError(ConfigurationError, ValueError):
    """Raised when annotating an attribute that is not a member of a set."""

    def __init__(self, attribute: str, set_name: str | None = None) -> None:
        self.attribute = attribute
        self.set_name = set_name
        where = f" of set {set_name!r}" if set_name else ""
        super().__init__(
            f"Attribute {attribute!r} must be a member{where} in order to annotate it"
        )


class UnknownOptionError(ConfigurationError):
    """Raised when a filter registration receives an unknown option."""

    def __init__(self, filter_name: str, options: Iterable[str]) -> None:
        self.filter_name = filter_name
        self.options = tuple(options)
        super().__init__(
            f"Unknown option(s) for filter {filter_name!r}: {', '.join(self.options)}"
        )


class MissingDestinationError(ConfigurationError):
    """Raised when the destination attribute of a filter is not specified."""

    def __init__(self, filter_name: str, sources: Any) -> None:
        self.filter_name = filter_name
        self.sources = sources
        super().__init__(
            f"Filter {filter_name!r} requires a destination attribute for sources {sources!r}"
        )


class FrozenAttributeSetError(ConfigurationError, TypeError):
    """Raised when trying to mutate a frozen attribute set."""

    def __init__(self, attribute_set: Any) -> None:
        self.attribute_set = attribute_set
        super().__init__(
            f"Cannot modify frozen {attribute_set!r}, use duplicate() to obtain a mutable copy"
        )


class IncompatibleModelError(ConfigurationError, TypeError):
    """Raised when an object does not implement the host model contract."""

    def __init__(self, model: Any, missing: Iterable[str]) -> None:
        self.model = model
        self.missing = tuple(missing)
        super().__init__(
            f"{type(model).__qualname__} must implement {', '.join(self.missing)} in order to use attribute filters"
        )
