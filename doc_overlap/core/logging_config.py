"""
Centralized logging configuration for the document overlap analyzer.

Library modules only obtain loggers; handlers are installed by the
application entry point through ``setup_logging``.
"""

import json
import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

# Extra record attributes copied into structured log lines.
CONTEXT_FIELDS = (
    'operation', 'duration', 'document_id', 'doc_a', 'doc_b',
    'document_count', 'pair_count', 'metric', 'max_workers',
)

LOG_FILE_NAME = "analysis.log"
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Document ids are often non-ASCII filenames
        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger instance for this class."""
        if not hasattr(self, '_logger'):
            self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        return self._logger

    def log_operation(self, operation: str, **kwargs):
        """Log an operation with additional context."""
        extra = {'operation': operation}
        extra.update(kwargs)
        return OperationLogger(self.logger, extra)


class OperationLogger:
    """Context manager for logging operations with timing."""

    def __init__(self, logger: logging.Logger, extra: dict):
        self.logger = logger
        self.extra = extra
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting operation: {self.extra.get('operation', 'unknown')}", extra=self.extra)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        self.extra['duration'] = self.duration

        if exc_type is None:
            self.logger.info(f"Completed operation: {self.extra.get('operation', 'unknown')}", extra=self.extra)
        else:
            self.logger.error(f"Failed operation: {self.extra.get('operation', 'unknown')}: {exc_val}",
                              extra=self.extra, exc_info=(exc_type, exc_val, exc_tb))
        return False


def setup_logging(log_level: str = "INFO",
                  log_dir: str = "logs",
                  structured_logging: bool = True,
                  enable_console: bool = True,
                  enable_file: bool = True,
                  max_file_size: int = 10 * 1024 * 1024,
                  backup_count: int = 5) -> logging.Logger:
    """
    Install the analyzer's handlers on the root logger.

    Handlers already on the root logger are replaced, so calling this again
    reconfigures rather than duplicates output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory that receives ``analysis.log``
        structured_logging: Emit JSON lines instead of plain text
        enable_console: Log to stdout
        enable_file: Log to a rotating file in ``log_dir``
        max_file_size: Size in bytes at which the log file rotates
        backup_count: Number of rotated files to keep

    Returns:
        The configured root logger
    """
    level = getattr(logging, log_level.upper())
    formatter = StructuredFormatter() if structured_logging else logging.Formatter(PLAIN_FORMAT)

    handlers = []
    if enable_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if enable_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            path / LOG_FILE_NAME,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        ))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    return root_logger


def configure_logging(config, enable_console: bool = False) -> logging.Logger:
    """Apply the logging fields of an ``AnalyzerConfig``; file output is always on."""
    return setup_logging(
        log_level=config.log_level,
        log_dir=config.log_dir,
        structured_logging=config.structured_logging,
        enable_console=enable_console,
        enable_file=True
    )


def get_logger(name: str) -> logging.Logger:
    """Return the named logger; output depends on what setup_logging installed."""
    return logging.getLogger(name)
