"""Hosts providing change tracking and attribute access to the filters."""

from .pydantic import TrackedModel
from .tracking import TrackedObject

__all__ = ("TrackedModel", "TrackedObject")
