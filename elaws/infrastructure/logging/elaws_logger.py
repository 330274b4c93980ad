"""
Structured logging for the e-Gov Law API client.

Provides consistent, structured logging with:
- JSON output for production
- Human-readable output for development
- Context tracking (correlation_id, operation)
- Request timings

Library code only emits records under the "elaws" namespace.
Handlers are attached by configure_logging (the CLI does this).
"""
import logging
import json
import sys
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from enum import Enum


ROOT_LOGGER_NAME = "elaws"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class LogLevel(Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogContext:
    """Context for structured logging."""
    correlation_id: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> 'LogContext':
        """Return new context with operation set."""
        return LogContext(
            correlation_id=self.correlation_id,
            component=self.component,
            operation=operation,
            extra=self.extra.copy(),
        )

    def with_extra(self, **kwargs) -> 'LogContext':
        """Return new context with additional data."""
        new_extra = self.extra.copy()
        new_extra.update(kwargs)
        return LogContext(
            correlation_id=self.correlation_id,
            component=self.component,
            operation=self.operation,
            extra=new_extra,
        )


@dataclass
class LogEntry:
    """Structured log entry."""
    timestamp: str
    level: str
    message: str
    component: Optional[str] = None
    correlation_id: Optional[str] = None
    operation: Optional[str] = None
    duration_ms: Optional[float] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        """Convert to JSON string."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        if not data.get('extra'):
            data.pop('extra', None)
        return json.dumps(data, ensure_ascii=False, default=str)

    def to_human(self) -> str:
        """Convert to human-readable string."""
        parts = [
            f"[{self.timestamp}]",
            f"[{self.level}]",
        ]

        if self.component:
            parts.append(f"[{self.component}]")

        parts.append(self.message)

        if self.duration_ms is not None:
            parts.append(f"({self.duration_ms:.2f}ms)")

        if self.error:
            parts.append(f"ERROR: {self.error}")

        return " ".join(parts)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for production."""

    def format(self, record: logging.LogRecord) -> str:
        entry = LogEntry(
            timestamp=_utcnow().isoformat(),
            level=record.levelname,
            message=record.getMessage(),
            component=getattr(record, 'component', None),
            correlation_id=getattr(record, 'correlation_id', None),
            operation=getattr(record, 'operation', None),
            duration_ms=getattr(record, 'duration_ms', None),
            error=str(record.exc_info[1]) if record.exc_info else getattr(record, 'error', None),
            error_type=record.exc_info[0].__name__ if record.exc_info and record.exc_info[0] else getattr(record, 'error_type', None),
            extra=getattr(record, 'extra', {}),
        )
        return entry.to_json()


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        entry = LogEntry(
            timestamp=_utcnow().strftime("%H:%M:%S"),
            level=record.levelname,
            message=record.getMessage(),
            component=getattr(record, 'component', None),
            duration_ms=getattr(record, 'duration_ms', None),
            error=str(record.exc_info[1]) if record.exc_info else getattr(record, 'error', None),
        )
        return entry.to_human()


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    json_output: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach console (stderr) and optional file handlers to the "elaws" logger.

    Existing handlers are replaced, so calling this twice is safe.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level.value))

    # Remove existing handlers
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.value))
    console_handler.setFormatter(JSONFormatter() if json_output else HumanFormatter())
    root.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    return root


class ElawsLogger:
    """
    Structured logger for the e-Gov Law API client.

    Usage:
        logger = ElawsLogger("client")

        ctx = LogContext(correlation_id="abc123")
        logger.info("Fetching law", ctx, law_id="322AC0000000067")

        with logger.timed_operation("lawdata", ctx):
            await fetcher.fetch(url)
    """

    def __init__(self, component: str):
        self._component = component
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")

    @property
    def component(self) -> str:
        return self._component

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[LogContext] = None,
        duration_ms: Optional[float] = None,
        **kwargs,
    ) -> None:
        """Internal log method."""
        extra = {
            'component': self._component,
            'duration_ms': duration_ms,
            'error': kwargs.pop('error', None),
            'error_type': kwargs.pop('error_type', None),
            'extra': kwargs,
        }

        if context:
            extra['correlation_id'] = context.correlation_id
            extra['operation'] = context.operation
            extra['extra'].update(context.extra)

        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs) -> None:
        self._log(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs) -> None:
        self._log(logging.INFO, message, context, **kwargs)

    def timed_operation(
        self,
        operation: str,
        context: Optional[LogContext] = None,
    ) -> 'TimedOperation':
        """Context manager for timing operations."""
        return TimedOperation(self, operation, context)


class TimedOperation:
    """
    Context manager for timing operations.

    Failures are recorded at DEBUG and always re-raised; reporting them
    is the caller's job.
    """

    def __init__(
        self,
        logger: ElawsLogger,
        operation: str,
        context: Optional[LogContext] = None,
    ):
        self._logger = logger
        self._operation = operation
        self._context = context.with_operation(operation) if context else LogContext(operation=operation)
        self._start_time: Optional[datetime] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        self._start_time = _utcnow()
        self._logger.debug(f"Starting {self._operation}", self._context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (_utcnow() - self._start_time).total_seconds() * 1000

        if exc_type:
            self._logger.debug(
                f"Failed {self._operation}",
                self._context,
                duration_ms=self.duration_ms,
                error=str(exc_val),
                error_type=exc_type.__name__,
            )
        else:
            self._logger.info(
                f"Completed {self._operation}",
                self._context,
                duration_ms=self.duration_ms,
            )

        return False  # Don't suppress exceptions
