"""
swiftparser - Structured Logging

JSON structured logging with correlation ids and operation timings, used by
the extractors and the parsing façade.
"""

import logging
import json
import sys
import time
import threading
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import ParserConfig, get_config


class LogLevel(Enum):
    """Log levels carried on structured events."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_record(cls, levelname: str) -> "LogLevel":
        if levelname == "WARNING":
            return cls.WARN
        try:
            return cls(levelname)
        except ValueError:
            return cls.INFO


class LogCategory(Enum):
    """Log categories for filtering and routing."""
    SYSTEM = "system"
    DETECTION = "detection"
    PARSING = "parsing"
    PERFORMANCE = "performance"
    ENTERPRISE = "enterprise"


@dataclass
class LogContext:
    """Context information for structured logging."""
    correlation_id: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    message_format: Optional[str] = None
    additional_fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        return {k: v for k, v in result.items() if v is not None and v != {}}


@dataclass
class LogEvent:
    """Structured log event."""
    timestamp: float
    level: LogLevel
    category: LogCategory
    message: str
    component: str
    operation: Optional[str] = None
    context: Optional[LogContext] = None
    exception: Optional[BaseException] = None
    performance_metrics: Optional[Dict[str, float]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    environment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'timestamp': self.timestamp,
            'iso_timestamp': datetime.fromtimestamp(self.timestamp, timezone.utc).isoformat(),
            'level': self.level.value,
            'category': self.category.value,
            'message': self.message,
            'component': self.component,
            'operation': self.operation,
            'metadata': self.metadata
        }

        if self.environment:
            result['environment'] = self.environment

        if self.context:
            result['context'] = self.context.to_dict()

        if self.exception:
            result['exception'] = {
                'type': type(self.exception).__name__,
                'message': str(self.exception),
                'traceback': traceback.format_exception(
                    type(self.exception), self.exception, self.exception.__traceback__
                )
            }

        if self.performance_metrics:
            result['performance_metrics'] = self.performance_metrics

        return result

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class StructuredFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def __init__(self, include_context: bool = True, environment: Optional[str] = None):
        super().__init__()
        self.include_context = include_context
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, 'context', None) if self.include_context else None
        category = getattr(record, 'category', LogCategory.SYSTEM)
        if not isinstance(category, LogCategory):
            category = LogCategory.SYSTEM

        log_event = LogEvent(
            timestamp=record.created,
            level=LogLevel.from_record(record.levelname),
            category=category,
            message=record.getMessage(),
            component=getattr(record, 'component', record.name),
            operation=getattr(record, 'operation', None),
            context=context,
            exception=record.exc_info[1] if record.exc_info else None,
            performance_metrics=getattr(record, 'performance_metrics', None),
            metadata=getattr(record, 'metadata', {}) or {},
            environment=self.environment
        )

        return log_event.to_json()


class PerformanceLogger:
    """Logger specifically for performance metrics."""

    MAX_SAMPLES = 1000

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.operation_times: Dict[str, List[float]] = {}
        self.lock = threading.Lock()

    @contextmanager
    def time_operation(self, operation_name: str, context: Optional[LogContext] = None):
        """Context manager to time operations."""
        start_time = time.perf_counter()

        try:
            yield
        finally:
            duration = time.perf_counter() - start_time

            with self.lock:
                samples = self.operation_times.setdefault(operation_name, [])
                samples.append(duration)
                if len(samples) > self.MAX_SAMPLES:
                    del samples[:-self.MAX_SAMPLES]

            self.logger.debug(
                f"Operation {operation_name} completed",
                extra={
                    'category': LogCategory.PERFORMANCE,
                    'performance_metrics': {
                        'operation': operation_name,
                        'duration_seconds': duration,
                        'duration_ms': duration * 1000
                    },
                    'context': context
                }
            )

    def get_operation_stats(self, operation_name: str) -> Optional[Dict[str, float]]:
        """Get statistics for an operation."""
        with self.lock:
            times = list(self.operation_times.get(operation_name, ()))
        if not times:
            return None

        return {
            'count': len(times),
            'avg_duration': sum(times) / len(times),
            'min_duration': min(times),
            'max_duration': max(times),
            'total_duration': sum(times)
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        """Get statistics for all operations."""
        with self.lock:
            names = list(self.operation_times.keys())
        return {name: self.get_operation_stats(name) for name in names}


def configure_logging(level: str = "INFO", json_format: bool = True,
                      stream=None, environment: Optional[str] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger("swiftparser")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(package_logger.handlers):
        if getattr(handler, '_swiftparser_handler', False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(StructuredFormatter(environment=environment))
    else:
        handler.setFormatter(
            logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
        )
    handler._swiftparser_handler = True
    package_logger.addHandler(handler)

    return package_logger


def setup_logging(config: Optional[ParserConfig] = None, stream=None) -> logging.Logger:
    """Configure package logging from a ParserConfig (the global one by default)."""
    if config is None:
        config = get_config()

    return configure_logging(
        level=config.log_level.value,
        json_format=config.log_format == "json",
        stream=stream,
        environment=config.environment.value,
    )
