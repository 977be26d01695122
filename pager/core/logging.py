"""Structured logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger, Processor

DEFAULT_LOGGER_NAME = "pager"


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Route structlog events to stderr.

    Command output owns stdout, so log lines never mix with rendered tables.

    Args:
        verbose: Emit DEBUG events (controller transitions, requests)
        json_logs: Render one JSON object per line instead of console text
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(json_logs))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: str) -> FilteringBoundLogger:
    """Get a structlog logger, optionally bound to a view.

    Example:
        log = get_logger(view="search-results")
        log.info("page_committed")  # Output includes view="search-results"
    """
    logger = structlog.get_logger(name or DEFAULT_LOGGER_NAME)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
