import logging

from attribute_filters.settings import FilterSettings, get_settings

__all__ = ("configure_logging",)

LOGGER_NAME = "attribute_filters"


def configure_logging(settings: FilterSettings | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling it again replaces the handler installed previously instead of
    adding another one.

    Args:
        settings (FilterSettings | None, optional): Source of the level and
            format. Defaults to the cached environment settings.

    Returns:
        logging.Logger: The package logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in tuple(logger.handlers):
        if getattr(handler, "_attribute_filters", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.log_format))
    handler._attribute_filters = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(settings.log_level.upper())
    return logger
