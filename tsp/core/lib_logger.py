"""Structured logging configuration for tsp."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import TspConfig

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "getMessage",
    "exc_info", "exc_text", "stack_info", "taskName", "message",
})


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class TspLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds tsp-specific context."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Merge adapter context into the record's extra fields."""
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context) -> "TspLoggerAdapter":
        """Create new adapter with additional context."""
        new_extra = dict(self.extra)
        new_extra.update(context)
        return TspLoggerAdapter(self.logger, new_extra)


class LoggingManager:
    """Manage logging configuration for tsp."""

    def __init__(self, config: TspConfig):
        """Initialize logging manager with configuration."""
        self.config = config
        self.console = Console(stderr=True)
        self._configured = False

    def setup_logging(self) -> None:
        """Set up logging configuration based on settings."""
        if self._configured:
            return

        level = "DEBUG" if self.config.debug else self.config.log_level

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if self.config.log_file else level)

        # Remove handlers installed by a previous configuration
        for handler in root_logger.handlers[:]:
            if isinstance(handler, (RichHandler, logging.FileHandler)):
                root_logger.removeHandler(handler)

        console_handler = RichHandler(
            console=self.console,
            show_time=self.config.debug,
            show_path=self.config.debug,
            rich_tracebacks=True,
            tracebacks_show_locals=self.config.debug
        )
        console_handler.setLevel(level)
        if self.config.debug:
            console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root_logger.addHandler(console_handler)

        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(StructuredFormatter())
            root_logger.addHandler(file_handler)

        self._configure_third_party_logging()

        self._configured = True

    def _configure_third_party_logging(self) -> None:
        """Reduce noise from third-party libraries."""
        for logger_name in ("httpx", "httpcore", "asyncio"):
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    def get_logger(self, name: str, **context) -> TspLoggerAdapter:
        """Get a logger with tsp-specific context."""
        if not self._configured:
            self.setup_logging()

        return TspLoggerAdapter(logging.getLogger(name), context)

    def get_component_logger(self, component: str, **context) -> TspLoggerAdapter:
        """Get a logger for a specific tsp component."""
        context["component"] = component
        return self.get_logger(f"tsp.{component}", **context)


# Global logging manager instance
_logging_manager: Optional[LoggingManager] = None


def setup_logging(config: TspConfig) -> LoggingManager:
    """Set up global logging configuration."""
    global _logging_manager
    _logging_manager = LoggingManager(config)
    _logging_manager.setup_logging()
    return _logging_manager


def get_logger(name: str, **context) -> TspLoggerAdapter:
    """Get a logger instance.

    Loggers are plain adapters over :func:`logging.getLogger`, so a module-level
    ``logger = get_logger(__name__)`` keeps working after :func:`setup_logging`
    is called again with a different configuration.
    """
    if _logging_manager is None:
        # Fallback if logging not configured
        from .config import get_config
        setup_logging(get_config())

    return _logging_manager.get_logger(name, **context)


def get_component_logger(component: str, **context) -> TspLoggerAdapter:
    """Get a component-specific logger."""
    if _logging_manager is None:
        from .config import get_config
        setup_logging(get_config())

    return _logging_manager.get_component_logger(component, **context)
