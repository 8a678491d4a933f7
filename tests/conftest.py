from pytest import fixture

from attribute_filters.attribute_set import AttributeSet
from attribute_filters.registry import SetRegistry
from attribute_filters.settings import reset_settings


@fixture(scope="function")
def registry() -> SetRegistry:
    return SetRegistry()


@fixture(scope="function")
def people() -> AttributeSet:
    return AttributeSet(
        "first_name",
        {"last_name": {"fill_value": "Doe", "order": 1}},
        "email",
    )


@fixture(scope="function")
def contacts() -> AttributeSet:
    return AttributeSet(
        {"last_name": {"fill_value": "Smith", "required": True}},
        "email",
        "phone",
    )


@fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()
