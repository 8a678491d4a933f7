"""Contract between attribute filters and the model framework hosting them."""

from collections.abc import Collection, Mapping
from typing import Any, Protocol, runtime_checkable

from attribute_filters._helper import has_accessors
from attribute_filters.errors import IncompatibleModelError

__all__ = (
    "HostModel",
    "HOST_METHODS",
    "REGISTRY_ATTR",
    "ensure_host",
    "accessible_names",
    "virtual_names",
)

REGISTRY_ATTR = "attribute_sets"

HOST_METHODS = (
    "changed_attributes",
    "read_attribute",
    "write_attribute",
    "accessible_attribute_names",
)


@runtime_checkable
class HostModel(Protocol):
    """Methods a model must provide in order to be filtered."""

    def changed_attributes(self) -> Mapping[str, Any]:
        """Attributes that differ from the persisted state with their previous values."""
        raise NotImplementedError()

    def read_attribute(self, name: str) -> Any:
        raise NotImplementedError()

    def write_attribute(self, name: str, value: Any) -> None:
        raise NotImplementedError()

    def accessible_attribute_names(self) -> Collection[str]:
        """Names of the attributes that can be read and written."""
        raise NotImplementedError()


def ensure_host(model: Any) -> HostModel:
    """Check that an object implements the host model contract.

    Args:
        model (Any): The object to check.

    Returns:
        HostModel: The same object.

    Raises:
        IncompatibleModelError: If any of the contract methods is missing.
    """
    missing = tuple(
        method
        for method in HOST_METHODS
        if not callable(getattr(model, method, None))
    )
    if missing:
        raise IncompatibleModelError(model, missing)
    return model


def virtual_names(model: Any, no_presence_check: bool = False) -> set[str]:
    """Virtual attributes declared for the model class.

    Unless no_presence_check is set, only attributes having both a getter and
    a setter on the model are returned.
    """
    registry = getattr(type(model), REGISTRY_ATTR, None)
    if registry is None:
        return set()
    if no_presence_check:
        return set(registry.virtual_attributes)
    return {
        name
        for name in registry.virtual_attributes
        if has_accessors(model, name)
    }


def accessible_names(model: HostModel) -> set[str]:
    """Names accessible on the model, including declared virtual attributes."""
    return set(model.accessible_attribute_names()) | virtual_names(model)
