"""Logging configuration module.

This module provides process-wide logging setup and the logger factory.
"""

from .logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
