"""Structured logging for pathkit."""

from .structured import LogLevel, StructuredLogger, create_logger, null_logger

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "create_logger",
    "null_logger",
]
