"""Logging configuration for ktoolhu."""

from ktoolhu.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
