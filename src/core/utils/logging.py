"""Logging helpers for services embedding the engine."""

import logging

from rich.logging import RichHandler

_LOGGER_CONFIGURED = False


def configure_logging(debug: bool = False, *, level: int | None = None) -> None:
    """Configure process-wide logging with a Rich handler.

    The engine modules only create named loggers; nothing is configured on
    import. Call this once from the embedding process.
    """
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    resolved_level = level or (logging.DEBUG if debug else logging.INFO)
    logging.basicConfig(
        level=resolved_level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler()],
    )
    _LOGGER_CONFIGURED = True
