from collections.abc import Iterable, Mapping
from typing import Any

from attribute_filters.registry import SetRegistry


class FakeModel:
    """Host keeping attribute values and changes in dictionaries."""

    attribute_sets = SetRegistry()

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        changes: Mapping[str, Any] | None = None,
    ) -> None:
        self.values = dict(values or {})
        self.changes = dict(changes or {})
        self.reads: list[str] = []
        self.writes: list[str] = []

    def changed_attributes(self) -> dict[str, Any]:
        return dict(self.changes)

    def read_attribute(self, name: str) -> Any:
        self.reads.append(name)
        try:
            return self.values[name]
        except KeyError:
            raise AttributeError(name) from None

    def write_attribute(self, name: str, value: Any) -> None:
        self.writes.append(name)
        self.values[name] = value

    def accessible_attribute_names(self) -> set[str]:
        return set(self.values)


def create_model(
    registry: SetRegistry,
    values: Mapping[str, Any],
    changed: Iterable[str] | None = None,
) -> FakeModel:
    """Create a fake model using the registry.

    All the values count as changed from None unless ``changed`` is given.
    """
    model_type = type("Model", (FakeModel,), {"attribute_sets": registry})
    if changed is None:
        changed = values
    return model_type(values, {name: None for name in changed})
