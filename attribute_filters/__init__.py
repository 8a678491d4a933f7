"""Attribute filters, declarative sets of model attributes and the filters using them."""

__version__ = "0.1.0"

import logging

from .attribute_set import AttributeSet
from .errors import (
    AttributeFiltersError,
    ConfigurationError,
    FrozenAttributeSetError,
    IncompatibleModelError,
    InvalidAttributeError,
    MissingDestinationError,
    UnknownOptionError,
)
from .filtering import (
    FilterContext,
    attributes_to_filter,
    filter_attributes_from_set,
    for_each_attribute_from_set,
)
from .host import HostModel
from .logging_config import configure_logging
from .model import AttributeFilters, before_save, collect_hooks, get_registry
from .query import AttributeQuery, SetQuery
from .registry import SetRegistry
from .settings import FilterSettings, get_settings

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AttributeSet",
    "SetRegistry",
    "SetQuery",
    "AttributeQuery",
    "AttributeFilters",
    "HostModel",
    "FilterContext",
    "attributes_to_filter",
    "filter_attributes_from_set",
    "for_each_attribute_from_set",
    "before_save",
    "collect_hooks",
    "get_registry",
    "FilterSettings",
    "get_settings",
    "configure_logging",
    "AttributeFiltersError",
    "ConfigurationError",
    "InvalidAttributeError",
    "UnknownOptionError",
    "MissingDestinationError",
    "FrozenAttributeSetError",
    "IncompatibleModelError",
]
