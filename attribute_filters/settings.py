"""Settings of the attribute filters read from the environment.

Example:
    # ATTRIBUTE_FILTERS_JOIN_SEPARATOR=", "
    from attribute_filters.settings import get_settings

    print(get_settings().join_separator)
    #> ,
"""

from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("FilterSettings", "get_settings", "reset_settings")


class FilterSettings(BaseSettings):
    """Package wide defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ATTRIBUTE_FILTERS_",
        extra="ignore",
    )

    join_separator: str = " "
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@cache
def get_settings() -> FilterSettings:
    return FilterSettings()


def reset_settings() -> None:
    """Forget the cached settings so the next read reloads the environment."""
    get_settings.cache_clear()
