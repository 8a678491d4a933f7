from pytest import fixture, raises

from attribute_filters.attribute_set import AttributeSet
from attribute_filters.errors import IncompatibleModelError
from attribute_filters.query import AttributeQuery, SetQuery
from attribute_filters.registry import SetRegistry
from tests.utils import FakeModel, create_model


@fixture
def model(registry: SetRegistry) -> FakeModel:
    registry.define_set("names", "first_name", "last_name", "nickname")
    registry.define_set("contact", "email")
    return create_model(
        registry,
        {
            "first_name": "JANE",
            "last_name": "DOE",
            "nickname": "",
            "email": "jane@example.com",
        },
        changed=["first_name"],
    )


@fixture
def names(model: FakeModel, registry: SetRegistry) -> SetQuery:
    return SetQuery(registry["names"], model)


def test_all_and_any_satisfy(names: SetQuery):
    assert not names.all_satisfy("present")
    assert names.any_satisfy("blank")
    assert names.all_satisfy(lambda value: isinstance(value, str))
    assert names.none_satisfy(lambda value: value == "x")
    assert names.one_satisfies("blank")
    assert not names.one_satisfies("present")


def test_empty_query_satisfies_all(model: FakeModel):
    query = SetQuery(AttributeSet(), model)

    assert query.all_satisfy("present")
    assert not query.any_satisfy("present")


def test_select_and_reject(names: SetQuery):
    assert names.select("present").members == ("first_name", "last_name")
    assert names.select("isupper").members == ("first_name", "last_name")
    assert names.reject("present").members == ("nickname",)
    assert names.select("truthy").select(
        lambda value: value.startswith("J")
    ).members == ("first_name",)


def test_changed(names: SetQuery):
    assert names.changed().members == ("first_name",)
    assert names.any_changed()
    assert names.reject("present").all_unchanged()


def test_values(names: SetQuery, model: FakeModel):
    assert names.values() == ["JANE", "DOE", ""]
    assert names.values_dict() == {
        "first_name": "JANE",
        "last_name": "DOE",
        "nickname": "",
    }
    assert SetQuery(["ghost", "first_name"], model).values() == [None, "JANE"]


def test_query_works_on_copy(
    names: SetQuery, registry: SetRegistry, model: FakeModel
):
    names.annotate("first_name", "key", "value")
    names.attribute_set.add("other")

    assert names.annotation("first_name", "key") == "value"
    assert "other" not in names
    assert not registry["names"].has_annotation("first_name")


def test_persist(names: SetQuery, registry: SetRegistry):
    names.annotate("first_name", "key", "value").persist(registry, "names")

    assert registry["names"].annotation("first_name", "key") == "value"
    assert registry["names"].is_frozen


def test_set_algebra(names: SetQuery, model: FakeModel, registry: SetRegistry):
    contact = SetQuery(registry["contact"], model)

    union = names | contact

    assert isinstance(union, SetQuery)
    assert union.members == ("first_name", "last_name", "nickname", "email")
    assert (names & ["last_name", "x"]).members == ("last_name",)
    assert (names - ["last_name"]).members == ("first_name", "nickname")
    assert (names ^ ["nickname", "x"]).members == ("first_name", "last_name", "x")


def test_equality(names: SetQuery, model: FakeModel):
    assert names == {"first_name", "last_name", "nickname"}
    assert names == SetQuery(["first_name", "last_name", "nickname"], model)
    assert len(names) == 3
    assert list(names) == ["first_name", "last_name", "nickname"]


def test_changed_requires_host():
    query = SetQuery(["a"], object())

    with raises(IncompatibleModelError):
        query.changed()


def test_attribute_query(model: FakeModel, registry: SetRegistry):
    attribute = AttributeQuery(model, "first_name")

    assert attribute.name == "first_name"
    assert attribute.sets() == {"names"}
    assert attribute.is_member_of("names")
    assert attribute.in_set("names")
    assert not attribute.belongs_to("contact")
    assert "names" in attribute
    assert attribute.value() == "JANE"
    assert attribute.is_accessible()
    assert attribute.is_changed()
    assert AttributeQuery(model, "last_name").is_unchanged()


def test_attribute_query_of_unknown_attribute(model: FakeModel):
    attribute = AttributeQuery(model, "ghost")

    assert not attribute.sets()
    assert not attribute.is_member_of("names")
    assert not attribute.is_accessible()
    assert attribute.value() is None
    assert not attribute.is_virtual()


def test_attribute_query_of_virtual_attribute(registry: SetRegistry):
    registry.treat_as_real("full_name")

    class Person(FakeModel):
        attribute_sets = registry

        @property
        def full_name(self):
            return "Jane Doe"

        @full_name.setter
        def full_name(self, value):
            pass

    attribute = AttributeQuery(Person(), "full_name")

    assert attribute.is_virtual()
    assert attribute.is_accessible()
