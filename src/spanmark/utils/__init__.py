"""Internal utilities for spanmark."""

from spanmark.utils.logger import get_logger

__all__ = ["get_logger"]
