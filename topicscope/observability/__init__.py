"""Observability layer - structured logging."""

from topicscope.observability.logging import NOISY_LOGGERS, log_context, setup_logging

__all__ = ["setup_logging", "log_context", "NOISY_LOGGERS"]
