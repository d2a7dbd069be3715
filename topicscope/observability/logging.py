"""
Structured logging configuration using structlog.

Library modules log through stdlib ``logging.getLogger(__name__)`` and stay
silent until an application configures logging. The CLI calls
setup_logging() once, then wraps each command in log_context() so every
line of a run carries the model and input paths.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import Processor

from topicscope.config.settings import get_settings

# Backends that log per batch or per request at INFO/DEBUG
NOISY_LOGGERS = ("numba", "umap", "httpx", "httpcore", "openai", "anthropic")


def setup_logging(level: str | None = None) -> None:
    """
    Configure structured logging for topicscope.

    Production renders JSON lines; any other environment renders colored
    console output. Both go to stderr so command output on stdout stays
    machine-readable.

    Args:
        level: Log level override (e.g. "DEBUG"). Defaults to the LOG_LEVEL
            setting.
    """
    settings = get_settings()
    log_level = level or settings.log_level

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderers(settings.is_production),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderers(production: bool) -> list[Processor]:
    if production:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=True)]


@contextmanager
def log_context(**fields: object) -> Iterator[None]:
    """
    Attach ``fields`` to every structlog line emitted inside the block.

    Usage:
        with log_context(command="fit", input="docs.jsonl"):
            engine.fit(embeddings, texts)
    """
    structlog.contextvars.bind_contextvars(**fields)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*fields)
