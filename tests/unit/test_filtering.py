from pytest import raises

from attribute_filters.attribute_set import AttributeSet
from attribute_filters.errors import IncompatibleModelError
from attribute_filters.filtering import (
    FilterContext,
    attributes_to_filter,
    filter_attributes_from_set,
    for_each_attribute_from_set,
)
from attribute_filters.filters import STRIP
from attribute_filters.host import HOST_METHODS
from attribute_filters.registry import SetRegistry
from tests.utils import FakeModel, create_model


def upper(value, context):
    return value.upper()


def test_attributes_to_filter_takes_changed_members(registry: SetRegistry):
    registry.define_set("names", "a", "b", "c")
    model = create_model(registry, {"a": "x", "b": "y", "d": "z"})
    model.changes = {"a": "old", "d": None}

    assert attributes_to_filter(model, "names") == {"a": "old"}


def test_attributes_to_filter_all(registry: SetRegistry):
    registry.define_set("names", "a", "b", "ghost")
    model = create_model(registry, {"a": "x", "b": "y"}, changed=[])

    assert attributes_to_filter(model, "names", process_all=True) == {
        "a": None,
        "b": None,
    }
    assert attributes_to_filter(
        model, "names", process_all=True, no_presence_check=True
    ) == {"a": None, "b": None, "ghost": None}


def test_attributes_to_filter_includes_virtual_attributes(
    registry: SetRegistry,
):
    registry.define_set("names", "full_name")
    registry.treat_as_real("full_name")

    class Person(FakeModel):
        attribute_sets = registry

        @property
        def full_name(self):
            return "Jane Doe"

        @full_name.setter
        def full_name(self, value):
            pass

    assert attributes_to_filter(Person(), "names", process_all=True) == {
        "full_name": None
    }


def virtual_person(registry: SetRegistry, name: str) -> FakeModel:
    class Person(FakeModel):
        attribute_sets = registry

        @property
        def full_name(self):
            return self.values["full_name"]

        @full_name.setter
        def full_name(self, value):
            self.values["full_name"] = value

    return Person({"full_name": name})


def test_unchanged_virtual_attributes_are_filtered(registry: SetRegistry):
    registry.treat_as_real("full_name")
    registry.strip_attributes("full_name")
    person = virtual_person(registry, "  jane  ")

    assert person.changed_attributes() == {}
    assert attributes_to_filter(person, "should_be_stripped") == {
        "full_name": None
    }

    STRIP.apply(person)

    assert person.values["full_name"] == "jane"


def test_virtual_attributes_filtered_only_when_changed(registry: SetRegistry):
    registry.treat_as_real("full_name")
    registry.strip_attributes("full_name")
    registry.filter_virtual_attributes_that_changed()
    person = virtual_person(registry, "  jane  ")

    STRIP.apply(person)

    assert registry.virtual_attributes_must_change
    assert person.values["full_name"] == "  jane  "

    person.changes = {"full_name": "jane"}
    STRIP.apply(person)

    assert person.values["full_name"] == "jane"


def test_virtual_attributes_without_accessors_are_skipped(
    registry: SetRegistry,
):
    registry.treat_as_real("nickname")
    registry.strip_attributes("nickname")
    model = create_model(registry, {"nickname": "  jj  "}, changed=[])

    assert attributes_to_filter(model, "should_be_stripped") == {}
    assert attributes_to_filter(
        model, "should_be_stripped", no_presence_check=True
    ) == {"nickname": None}


def test_filter_changed_attributes(registry: SetRegistry):
    registry.define_set("names", "first_name", "last_name")
    model = create_model(
        registry,
        {"first_name": "jane", "last_name": "doe", "email": "jane@example"},
        changed=["first_name", "email"],
    )

    filter_attributes_from_set(model, "names", upper)

    assert model.values == {
        "first_name": "JANE",
        "last_name": "doe",
        "email": "jane@example",
    }
    assert model.writes == ["first_name"]


def test_blank_values_are_skipped(registry: SetRegistry):
    registry.define_set("names", "a", "b", "c", "d")
    model = create_model(registry, {"a": None, "b": "", "c": [], "d": "x"})

    filter_attributes_from_set(model, "names", lambda value, context: value + "!")

    assert model.values == {"a": None, "b": "", "c": [], "d": "x!"}


def test_blank_values_are_processed_on_request(registry: SetRegistry):
    registry.define_set("names", "a", "b")
    model = create_model(registry, {"a": None, "b": "x"})

    filter_attributes_from_set(
        model, "names", lambda value, context: repr(value), process_blank=True
    )

    assert model.values == {"a": "None", "b": "'x'"}


def test_whitespace_and_false_are_not_blank(registry: SetRegistry):
    registry.define_set("names", "a", "b", "c")
    model = create_model(registry, {"a": "  ", "b": False, "c": 0})

    filter_attributes_from_set(model, "names", lambda value, context: "seen")

    assert model.values == {"a": "seen", "b": "seen", "c": "seen"}


def test_unchanged_attributes_are_skipped(registry: SetRegistry):
    registry.define_set("names", "a")
    model = create_model(registry, {"a": "x"})
    calls = []

    def transform(value, context):
        calls.append(value)
        return value * 2

    filter_attributes_from_set(model, "names", transform)
    model.changes = {}
    filter_attributes_from_set(model, "names", transform)

    assert calls == ["x"]
    assert model.values["a"] == "xx"


def test_process_all_includes_unchanged(registry: SetRegistry):
    registry.define_set("names", "a", "b")
    model = create_model(registry, {"a": "x", "b": "y"}, changed=[])

    filter_attributes_from_set(model, "names", upper, process_all=True)

    assert model.values == {"a": "X", "b": "Y"}


def test_context(registry: SetRegistry):
    registry.define_set("names", {"a": {"k": 1, "j": 2}})
    model = create_model(registry, {"a": "new"})
    model.changes = {"a": "old"}
    contexts: list[FilterContext] = []

    def record(value, context):
        contexts.append(context)
        return value

    filter_attributes_from_set(model, "names", record)
    filter_attributes_from_set(model, "names", record, process_all=True)

    changed, every = contexts
    assert changed.model is model
    assert changed.set_name == "names"
    assert changed.attribute == "a"
    assert changed.previous == "old"
    assert changed.annotation("k") == 1
    assert changed.annotation("k", "j") == (1, 2)
    assert changed.has_annotation("j")
    assert every.previous == "new"


def test_set_object_instead_of_name(registry: SetRegistry):
    model = create_model(registry, {"a": "x", "b": "y"})
    names = []

    filter_attributes_from_set(
        model,
        AttributeSet("b"),
        lambda value, context: names.append(context.set_name) or upper(value, context),
    )

    assert model.values == {"a": "x", "b": "Y"}
    assert names == [None]


def test_unknown_set_does_nothing(registry: SetRegistry):
    model = create_model(registry, {"a": "x"})

    filter_attributes_from_set(model, "unknown", upper)

    assert model.reads == []
    assert model.writes == []


def test_error_aborts_remaining_attributes(registry: SetRegistry):
    registry.define_set("names", "a", "b", "c")
    model = create_model(registry, {"a": "x", "b": 1, "c": "z"})

    with raises(AttributeError):
        filter_attributes_from_set(model, "names", upper)

    assert model.values == {"a": "X", "b": 1, "c": "z"}


def test_incompatible_model():
    class NotAModel:
        attribute_sets = SetRegistry()

        def read_attribute(self, name):
            return None

    with raises(IncompatibleModelError) as exc_info:
        filter_attributes_from_set(NotAModel(), "names", upper)

    assert exc_info.value.missing == tuple(
        method for method in HOST_METHODS if method != "read_attribute"
    )
    assert isinstance(exc_info.value, TypeError)


def test_for_each_does_not_write(registry: SetRegistry):
    registry.define_set("names", "a", "b")
    model = create_model(registry, {"a": "x", "b": ""})
    seen = []

    for_each_attribute_from_set(
        model, "names", lambda value, context: seen.append((context.attribute, value))
    )

    assert seen == [("a", "x")]
    assert model.writes == []
