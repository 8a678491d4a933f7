"""Host for pydantic models.

Changes are computed by comparing field values with a snapshot taken when
the model was last saved. The snapshot of a new model holds the defaults of
its fields, None for required fields.

Example:
    from attribute_filters import SetRegistry, before_save
    from attribute_filters.hosts import TrackedModel

    class Article(TrackedModel):
        title: str
        slug: str | None = None

        attribute_sets = SetRegistry()
        attribute_sets.squish_attributes("title")

        @before_save
        def clean_up(self):
            self.squish_attributes()

    article = Article(title="  Hello    world ")
    article.save()

    print(article.title)
    #> Hello world
"""

import copy
from typing import Any, ClassVar

from pydantic import BaseModel, PrivateAttr

from attribute_filters.model import AttributeFilters, run_before_save
from attribute_filters.registry import SetRegistry

__all__ = ("TrackedModel",)


class TrackedModel(AttributeFilters, BaseModel):
    """Pydantic model composed with attribute filters."""

    attribute_sets: ClassVar[SetRegistry]

    _snapshot: dict[str, Any] = PrivateAttr(default_factory=dict)

    def model_post_init(self, context: Any, /) -> None:
        self._snapshot = {
            name: None
            if field.is_required()
            else copy.deepcopy(field.get_default(call_default_factory=True))
            for name, field in type(self).model_fields.items()
        }

    def changed_attributes(self) -> dict[str, Any]:
        changes = {}
        for name in type(self).model_fields:
            previous = self._snapshot.get(name)
            if getattr(self, name) != previous:
                changes[name] = copy.deepcopy(previous)
        return changes

    def read_attribute(self, name: str) -> Any:
        return getattr(self, name)

    def write_attribute(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def accessible_attribute_names(self) -> set[str]:
        return set(type(self).model_fields)

    def changes_applied(self) -> None:
        """Take a snapshot of the current field values."""
        self._snapshot = {
            name: copy.deepcopy(getattr(self, name))
            for name in type(self).model_fields
        }

    def save(self) -> None:
        """Run the before save hooks and mark the current state as saved."""
        run_before_save(self)
        self.changes_applied()
