"""Host for plain Python objects tracking changes of their attributes.

Example:
    from attribute_filters.hosts import TrackedObject

    user = TrackedObject(name="Jane")
    user.save()
    user.name = "John"

    print(user.changed_attributes())
    #> {'name': 'Jane'}
"""

from typing import Any

from attribute_filters.host import REGISTRY_ATTR
from attribute_filters.model import run_before_save

__all__ = ("TrackedObject",)


class TrackedObject:
    """Object remembering values its attributes had when last saved.

    Attributes assigned while creating the object count as changed until the
    object is saved. Names starting with an underscore are not tracked.
    """

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "_changes", {})
        for name, value in values.items():
            setattr(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        changes: dict[str, Any] = self._changes
        if name in changes:
            object.__setattr__(self, name, value)
            if changes[name] == value:
                del changes[name]
            return
        if name in self.__dict__ and self.__dict__[name] == value:
            return
        changes[name] = getattr(self, name, None)
        object.__setattr__(self, name, value)

    def changed_attributes(self) -> dict[str, Any]:
        return dict(self._changes)

    def read_attribute(self, name: str) -> Any:
        return getattr(self, name)

    def write_attribute(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def accessible_attribute_names(self) -> set[str]:
        """Public instance attributes and plain class level defaults."""
        names = {name for name in self.__dict__ if not name.startswith("_")}
        for klass in type(self).__mro__:
            for name, value in vars(klass).items():
                if name.startswith("_") or name == REGISTRY_ATTR:
                    continue
                if callable(value) or isinstance(
                    value, (property, classmethod, staticmethod)
                ):
                    continue
                names.add(name)
        return names

    def changes_applied(self) -> None:
        """Forget tracked changes."""
        self._changes.clear()

    def save(self) -> None:
        """Run the before save hooks and mark the current state as saved."""
        run_before_save(self)
        self.changes_applied()
