"""Filter joining values of attributes into another attribute.

Example:
    class User(AttributeFilters, TrackedObject):
        attribute_sets = SetRegistry()
        attribute_sets.join_attribute(
            ["first_name", "last_name"], into="real_name"
        )

        real_name = None

    user = User(first_name="Jane", last_name="Doe")
    user.join_attributes()

    print(user.real_name)
    #> Jane Doe
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from attribute_filters._helper import is_blank, normalize_name
from attribute_filters.attribute_set import AttributeSet
from attribute_filters.errors import MissingDestinationError
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter, option_aliases
from attribute_filters.query import SetQuery
from attribute_filters.settings import get_settings

if TYPE_CHECKING:
    from attribute_filters.registry import SetRegistry

__all__ = ("JOIN", "register_join")

_DESTINATION_OPTIONS = ("into", "in", "destination")


def _flatten(values: Iterable[Any]) -> Iterator[Any]:
    for value in values:
        if isinstance(value, (list, tuple)):
            yield from _flatten(value)
        else:
            yield value


def join(value: Any, context: FilterContext) -> Any:
    """Join values of the ``join_from`` attributes.

    Without sources, a list or tuple value of the attribute itself is joined
    and any other value is left as is.
    """
    sources, compact = context.annotation("join_from", "join_compact")
    if is_blank(sources):
        if not isinstance(value, (list, tuple)):
            return value
        values = list(_flatten(value))
    else:
        if isinstance(sources, str) or not isinstance(sources, Iterable):
            sources = [sources]
        query = SetQuery(AttributeSet(sources), context.model)
        values = list(_flatten(query.values()))
    if context.has_annotation("join_separator"):
        separator = context.annotation("join_separator")
    else:
        separator = get_settings().join_separator
    if compact:
        values = [element for element in values if element is not None]
    return (separator or "").join(
        "" if element is None else str(element) for element in values
    )


JOIN = AttributeFilter(
    name="join",
    set_name="should_be_joined",
    transform=join,
    options=option_aliases(
        join_from=("from", "source", "sources"),
        join_separator=("with", "separator"),
        join_compact=("compact",),
    ),
    default_option="join_from",
    process_blank=True,
    process_all=True,
)


def _parameters(parameters: Any, options: Mapping[str, Any]) -> dict[str, Any]:
    if parameters is None:
        result = {}
    elif isinstance(parameters, Mapping):
        result = dict(parameters)
    else:
        result = {"from": parameters}
    result.update(options)
    return {normalize_name(key).rstrip("_"): value for key, value in result.items()}


def register_join(
    registry: "SetRegistry",
    attribute: Any,
    parameters: Any = None,
    **options: Any,
) -> None:
    """Register an attribute whose value is joined from other attributes.

    Args:
        registry (SetRegistry): The registry of the model class.
        attribute (Any): The destination attribute, a list of source
            attributes (requires ``into``, or a destination name given as
            ``parameters``) or a mapping of destinations to parameters.
        parameters (Any, optional): A mapping of options, or the sources.
            Defaults to None.
        **options (Any): Options: ``from``, ``separator`` (``with``),
            ``compact`` and ``into``.

    Raises:
        MissingDestinationError: If sources are given without a destination.
        UnknownOptionError: If an option is not known.
    """
    if isinstance(attribute, Mapping):
        for name, attribute_parameters in attribute.items():
            register_join(registry, name, attribute_parameters, **options)
        return
    if isinstance(attribute, (list, tuple)):
        if parameters is not None and not isinstance(parameters, Mapping):
            register_join(registry, parameters, list(attribute), **options)
            return
        parameters = _parameters(parameters, options)
        destination = None
        for key in _DESTINATION_OPTIONS:
            destination = parameters.pop(key, None) or destination
        if destination is None:
            raise MissingDestinationError(JOIN.name, list(attribute))
        parameters["from"] = list(attribute)
        register_join(registry, destination, parameters)
        return

    annotations = JOIN.normalize_options(_parameters(parameters, options))
    annotations.setdefault("join_separator", get_settings().join_separator)
    annotations["join_compact"] = bool(annotations.get("join_compact"))
    annotations.setdefault("join_from", None)
    registry.define_set(JOIN.set_name, attribute)
    for key, value in annotations.items():
        registry.annotate_set(JOIN.set_name, attribute, key, value)
