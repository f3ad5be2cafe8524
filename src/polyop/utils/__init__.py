"""Utility modules for polyop."""

from polyop.utils.logging import OperationLogger, OperationStats, configure_logging

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
