"""Structured logging with a consistent JSON-lines format.

Records go to stderr by default so that stdout stays reserved for tool output.
"""

from __future__ import annotations

import json
import sys
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from pathkit.config import load_settings


class LogLevel(Enum):
    """Standard log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def parse(cls, raw: Union[str, "LogLevel", None], default: "LogLevel") -> "LogLevel":
        """Parse a level name (case-insensitive); unknown names give ``default``."""
        if isinstance(raw, LogLevel):
            return raw
        if not raw:
            return default
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return default


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
    LogLevel.CRITICAL: 50,
}


class StructuredLogger:
    """Structured logger with consistent format and a minimum level."""

    def __init__(
        self,
        component: str,
        session_id: Optional[str] = None,
        output_file: Optional[Union[str, Path, TextIO]] = None,
        enable_console: bool = True,
        min_level: Union[LogLevel, str] = LogLevel.DEBUG,
        stream: Optional[TextIO] = None,
    ) -> None:
        """Initialize structured logger.

        Args:
            component: Component identifier (e.g., 'resolver', 'canonpath')
            session_id: Optional session ID for correlation
            output_file: Optional file path or handle for log output
            enable_console: Whether to output to the console stream (default: True)
            min_level: Records below this level are dropped
            stream: Console stream; ``sys.stderr`` at write time when omitted
        """
        self.component = component
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self.start_time = time.time()
        self.min_level = LogLevel.parse(min_level, LogLevel.DEBUG)

        self.console_enabled = enable_console
        self.stream = stream
        self.log_file: Optional[TextIO] = None
        self.log_file_path: Optional[Path] = None

        if output_file:
            if isinstance(output_file, (str, Path)):
                self.log_file_path = Path(output_file)
                self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
                self.log_file = open(self.log_file_path, "a", encoding="utf-8")
            else:
                self.log_file = output_file

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.severity >= self.min_level.severity

    def _format_log_entry(self, level: LogLevel, message: str, **context: Any) -> Dict[str, Any]:
        """Format log entry with consistent structure."""
        entry = {
            "timestamp": time.time(),
            "iso_timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()) + "Z",
            "level": level.value,
            "component": self.component,
            "session_id": self.session_id,
            "session_time": time.time() - self.start_time,
            "message": message,
            **context,
        }
        return entry

    def _write_log(self, entry: Dict[str, Any]) -> None:
        """Write log entry to configured outputs."""
        json_line = json.dumps(entry, default=str, separators=(",", ":"))

        if self.console_enabled:
            print(json_line, file=self.stream or sys.stderr, flush=True)

        if self.log_file:
            self.log_file.write(json_line + "\n")
            self.log_file.flush()

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        if not self.is_enabled_for(level):
            return
        self._write_log(self._format_log_entry(level, message, **context))

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self.log(LogLevel.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, message, **context)

    def critical(self, message: str, **context: Any) -> None:
        """Log critical message."""
        self.log(LogLevel.CRITICAL, message, **context)

    def close(self) -> None:
        """Close log file handle if we opened it."""
        if self.log_file and self.log_file_path is not None:
            self.log_file.close()
        self.log_file = None


def null_logger(component: str = "pathkit") -> StructuredLogger:
    """Logger that drops everything below CRITICAL and never writes to the console."""
    return StructuredLogger(component, enable_console=False, min_level=LogLevel.CRITICAL)


def create_logger(
    component: str,
    session_id: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Factory function to create structured logger with standard configuration.

    Args:
        component: Component identifier
        session_id: Optional session ID for correlation
        log_dir: Optional directory for log files (uses PK_LOG_DIR env var if not provided)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        Configured StructuredLogger instance
    """
    cfg = load_settings()
    if log_dir is None:
        log_dir = cfg.log_dir

    if "min_level" not in kwargs:
        kwargs["min_level"] = LogLevel.parse(cfg.log_level, LogLevel.WARNING)

    output_file = None
    if log_dir:
        output_file = Path(log_dir) / f"{component}_{session_id or 'default'}.jsonl"

    return StructuredLogger(
        component=component, session_id=session_id, output_file=output_file, **kwargs
    )
