"""Loguru setup for infrastructure components (LLM client, trust table).

Gate components log through structlog (see utils/logging.py); this module
covers the loguru side. Records always carry a ``component`` extra so the
console format can show where a line came from.
"""

import sys
from typing import Optional

from loguru import logger

from enrichment_system.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | <level>{message}</level>"
)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    (Re)configure the loguru sinks.

    Args:
        level: Minimum level (defaults to settings.log_level)
        log_format: "console" or "json" (defaults to settings.log_format)

    A colorized console sink is used only for an interactive terminal with
    console format requested; anything else gets serialized JSON on stdout.
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    logger.remove()
    logger.configure(extra={"component": "enrichment"})

    if sys.stderr.isatty() and log_format == "console":
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,  # prompts and source excerpts stay out of tracebacks
        )


def get_logger(component: str):
    """
    Loguru logger bound to a component name.

    Example:
        >>> log = get_logger("llm.gemini")
        >>> log.warning("Retry 1 for Gemini call")
    """
    return logger.bind(component=component)


configure_logging()

__all__ = ["logger", "get_logger", "configure_logging"]
