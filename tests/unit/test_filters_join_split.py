import re

from pytest import mark

from attribute_filters.filters import JOIN, SPLIT
from attribute_filters.registry import SetRegistry
from attribute_filters.settings import reset_settings
from tests.utils import create_model


def test_join(registry: SetRegistry):
    registry.join_attribute("real_name", ["first_name", "last_name"])
    model = create_model(
        registry,
        {"first_name": "Jane", "last_name": "Doe", "real_name": None},
        changed=[],
    )

    JOIN.apply(model)

    assert model.values["real_name"] == "Jane Doe"


def test_join_with_separator_and_compact(registry: SetRegistry):
    registry.join_attribute(["city", "street", "number"], into="address", with_=", ")
    registry.join_attribute(
        ["city", "street", "number"], into="short", compact=True, with_="/"
    )
    model = create_model(
        registry,
        {
            "city": "Warsaw",
            "street": None,
            "number": 12,
            "address": None,
            "short": None,
        },
    )

    JOIN.apply(model)

    assert model.values["address"] == "Warsaw, , 12"
    assert model.values["short"] == "Warsaw/12"


def test_join_own_elements(registry: SetRegistry):
    registry.join_attribute("tags")
    registry.join_attribute("title")
    model = create_model(
        registry, {"tags": ["a", ["b", "c"]], "title": "untouched"}
    )

    JOIN.apply(model)

    assert model.values == {"tags": "a b c", "title": "untouched"}


def test_join_skips_inaccessible_destination(registry: SetRegistry):
    registry.join_attribute("real_name", ["first_name"])
    model = create_model(registry, {"first_name": "Jane"})

    JOIN.apply(model)

    assert "real_name" not in model.values


def test_join_separator_from_settings(registry: SetRegistry, monkeypatch):
    monkeypatch.setenv("ATTRIBUTE_FILTERS_JOIN_SEPARATOR", "-")
    reset_settings()
    registry.join_attribute("code", ["prefix", "number"])
    model = create_model(
        registry, {"prefix": "AB", "number": 12, "code": None}
    )

    JOIN.apply(model)

    assert model.values["code"] == "AB-12"


def test_split_into_attributes(registry: SetRegistry):
    registry.split_attribute("real_name", into=["first_name", "last_name"])
    model = create_model(
        registry,
        {"real_name": "Jane Doe", "first_name": None, "last_name": None},
    )

    SPLIT.apply(model)

    assert model.values == {
        "real_name": "Jane Doe",
        "first_name": "Jane",
        "last_name": "Doe",
    }


def test_split_with_limit(registry: SetRegistry):
    registry.split_attribute(
        "real_name", into=["first_name", "last_name"], limit=2
    )
    model = create_model(registry, {"real_name": "Jane Mary Doe"})

    SPLIT.apply(model)

    assert model.values["first_name"] == "Jane"
    assert model.values["last_name"] == "Mary Doe"


def test_split_writes_none_for_missing_parts(registry: SetRegistry):
    registry.split_attribute("real_name", into=["first", "middle", "last"])
    model = create_model(registry, {"real_name": "Jane Doe"})

    SPLIT.apply(model)

    assert model.values["first"] == "Jane"
    assert model.values["middle"] == "Doe"
    assert model.values["last"] is None


@mark.parametrize(
    "options, value, expected",
    [
        ({}, "a b  c", ["a", "b", "c"]),
        ({"pattern": ","}, "a,b,,c", ["a", "b", "", "c"]),
        ({"pattern": ""}, "abc", ["a", "b", "c"]),
        ({"pattern": "", "limit": 2}, "abcd", ["a", "bcd"]),
        ({"pattern": re.compile(r"[,;]")}, "a;b,c", ["a", "b", "c"]),
        ({"pattern": re.compile(r"[,;]"), "limit": 2}, "a;b,c", ["a", "b,c"]),
        ({}, ["a b", "c"], [["a", "b"], ["c"]]),
        ({"flatten": True}, ["a b", "c d"], ["a", "b", "c", "d"]),
    ],
)
def test_split_in_place(registry: SetRegistry, options, value, expected):
    registry.split_attribute("value", options)
    model = create_model(registry, {"value": value})

    SPLIT.apply(model)

    assert model.values["value"] == expected


def test_split_then_join_restores_value(registry: SetRegistry):
    registry.split_attribute(
        "real_name", into=["first_name", "last_name"], pattern=" "
    )
    registry.join_attribute(
        ["first_name", "last_name"], into="full_name", separator=" "
    )
    model = create_model(
        registry,
        {"real_name": "Jane Doe", "first_name": None, "last_name": None, "full_name": None},
    )

    SPLIT.apply(model)
    JOIN.apply(model)

    assert model.values["first_name"] == "Jane"
    assert model.values["last_name"] == "Doe"
    assert model.values["full_name"] == "Jane Doe"
