"""
identspell Logging & Errors
===========================
Structured logging and the exception hierarchy shared by every module.

Loggers are configured from the ``logging`` section of the identspell
configuration (see ``identspell.config``).
"""

import sys
import json
import logging
import uuid
import time
import threading
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from contextlib import contextmanager

__version__ = "1.0.0"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                  # Number of log backup files to keep


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config=None):
        if config is None:
            from .config import get_logging_config
            config = get_logging_config()
        self.name = name
        self.config = config
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.level.upper(), logging.INFO))
        self.logger.handlers.clear()

        if self.config.format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self.config.to_file:
            from logging.handlers import RotatingFileHandler
            from pathlib import Path
            log_dir = Path(self.config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / f"{self.name.lower()}.log",
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        # Own handlers replace the root logger's, never add to them
        self.logger.propagate = not self.logger.handlers

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def _render(self, level: str, message: str, **kwargs) -> str:
        if self.config.format == 'json':
            return json.dumps(self._build_log_record(level, message, **kwargs), default=str)
        return message

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._render('DEBUG', message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message."""
        self.logger.info(self._render('INFO', message, **kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self.logger.warning(self._render('WARNING', message, **kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self.logger.error(self._render('ERROR', message, **kwargs), exc_info=exc_info)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.info(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if message.startswith('{'):
            # Already rendered by StructuredLogger
            if record.exc_info:
                data = json.loads(message)
                data['traceback'] = self.formatException(record.exc_info)
                return json.dumps(data, default=str)
            return message

        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': message,
        }
        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


_loggers: Dict[str, StructuredLogger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None:
            logger = StructuredLogger(name)
            _loggers[name] = logger
        return logger


def reset_loggers():
    """Forget cached loggers so the next get_logger() re-reads configuration."""
    with _loggers_lock:
        _loggers.clear()


# =============================================================================
# ERROR HANDLING
# =============================================================================

class IdentSpellError(Exception):
    """Base exception for identspell."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a report-friendly dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class FixListFormatError(IdentSpellError):
    """A fix list line is not a ``word=fix`` pair."""
    def __init__(self, message: str, path: Optional[str] = None,
                 line_number: Optional[int] = None, **kwargs):
        super().__init__(message, code="FIX_LIST_FORMAT",
                         details={'path': path, 'line_number': line_number, **kwargs})
        self.path = path
        self.line_number = line_number


class WordListError(IdentSpellError):
    """Word list file cannot be read."""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, code="WORD_LIST_ERROR",
                         details={'path': path, **kwargs})
        self.path = path


class ConfigurationError(IdentSpellError):
    """Invalid configuration value."""
    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        super().__init__(message, code="CONFIG_ERROR",
                         details={'key': key, **kwargs})


class OperationCanceledError(IdentSpellError):
    """Raised when a cancellation token has been signalled."""
    def __init__(self, message: str = "Operation was canceled", **kwargs):
        super().__init__(message, code="OPERATION_CANCELED", details=kwargs)
