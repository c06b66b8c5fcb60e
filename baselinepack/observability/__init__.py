"""Observability helpers for BaselineKit."""

from baselinepack.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
