"""structlog setup for gate components, plus per-run correlation context.

Gate components call ``structlog.get_logger().bind(component=...)``. The
pipeline step opens a ``run_context`` for each product so every event
emitted during that gate run carries the same ``run_id``, including
events from components that never see the id themselves.
"""

import sys
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.contextvars import bind_contextvars, merge_contextvars, unbind_contextvars
from structlog.processors import JSONRenderer

from enrichment_system.config.settings import settings


def configure_structured_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure structlog processors and renderer.

    Console rendering (colorized) is used for an interactive terminal with
    console format requested; otherwise events are rendered as JSON lines
    on stderr.
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    processors: list = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if sys.stderr.isatty() and log_format == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_structured_logger(name: str, **context: Any) -> structlog.BoundLogger:
    """
    Logger bound to ``component=name`` and any extra context.

    Example:
        >>> logger = get_structured_logger("CrossSourcePipeline", sources=3)
        >>> logger.info("gate_skipped")
    """
    logger = structlog.get_logger(name).bind(component=name)
    if context:
        logger = logger.bind(**context)
    return logger


def get_correlation_id() -> str:
    """New id for tracing one gate run across components."""
    return str(uuid.uuid4())


@contextmanager
def run_context(run_id: Optional[str] = None, **context: Any) -> Iterator[str]:
    """
    Bind ``run_id`` (and extra context) to every structlog event in scope.

    Yields:
        The run id in effect (generated when not given)
    """
    run_id = run_id or get_correlation_id()
    bind_contextvars(run_id=run_id, **context)
    try:
        yield run_id
    finally:
        unbind_contextvars("run_id", *context.keys())


configure_structured_logging()


__all__ = [
    "configure_structured_logging",
    "get_correlation_id",
    "get_structured_logger",
    "run_context",
]
