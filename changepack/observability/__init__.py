"""Logging setup for ChangeKit."""

from changepack.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
