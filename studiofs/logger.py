"""
studiofs Logger Module

Each subsystem ('tree', 'backing', 'loader', 'ingest', 'workspace',
'shell', 'host', 'config') logs through its own Logger, a child of the
'studiofs' logger. Records carry the subsystem name and a context dict,
e.g. the node id and host error behind a fallback.

Author: YSNRFD
Version: 1.0.0
"""

import logging
import sys
import threading
from collections import deque
from enum import IntEnum
from functools import partialmethod
from pathlib import Path
from typing import Optional, Any, List

ROOT_LOGGER = 'studiofs'


class LogLevel(IntEnum):
    """Log levels, numerically identical to the stdlib ones."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        """Map a level name such as 'info' to a LogLevel, defaulting to INFO."""
        return cls.__members__.get(name.upper(), cls.INFO)


def format_context(context: dict[str, Any]) -> str:
    return "{" + " ".join(f"{key}={value}" for key, value in context.items()) + "}"


class LogFormatter(logging.Formatter):
    """
    Renders `time LEVEL [subsystem] message {key=value ...}`.

    Level names are coloured when writing to a terminal.
    """

    LEVEL_COLORS = {
        LogLevel.DEBUG: '\033[36m',
        LogLevel.INFO: '\033[32m',
        LogLevel.WARNING: '\033[33m',
        LogLevel.ERROR: '\033[31m',
        LogLevel.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'
    default_msec_format = '%s.%03d'

    def __init__(self, use_colors: bool = True, stream=None):
        super().__init__()
        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and getattr(stream, 'isatty', lambda: False)()

    def _level(self, record: logging.LogRecord) -> str:
        name = f"{record.levelname:<8}"
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{name}{self.RESET}" if color else name

    def format(self, record: logging.LogRecord) -> str:
        parts = [self.formatTime(record), self._level(record)]

        subsystem = getattr(record, 'subsystem', None)
        if subsystem:
            parts.append(f"[{subsystem}]")

        parts.append(record.getMessage())

        context = getattr(record, 'context', None)
        if context:
            parts.append(format_context(context))

        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class LogBufferHandler(logging.Handler):
    """
    Keeps the most recent records in memory.

    Used to read back what happened during a command, e.g. which host
    entries ingestion skipped.
    """

    def __init__(self, max_entries: int = 10000):
        super().__init__()
        self._records: deque = deque(maxlen=max_entries)
        self._guard = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            'timestamp': record.created,
            'level': record.levelname,
            'subsystem': getattr(record, 'subsystem', None),
            'message': record.getMessage(),
            'context': dict(getattr(record, 'context', None) or {}),
        }
        with self._guard:
            self._records.append(entry)

    def get_logs(
        self,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """
        Recent records, oldest first.

        Args:
            level: Only records at or above this level name
            subsystem: Only records from this subsystem
            limit: Maximum number of records returned
        """
        threshold = LogLevel.from_name(level) if level else 0
        with self._guard:
            entries = list(self._records)

        selected = [
            entry for entry in entries
            if LogLevel.from_name(entry['level']) >= threshold
            and (subsystem is None or entry['subsystem'] == subsystem)
        ]
        return selected[-limit:]

    def clear(self) -> None:
        with self._guard:
            self._records.clear()


class Logger:
    """
    Per-subsystem logger; constructing the same subsystem twice returns
    the same instance.

    Example:
        >>> log = Logger('backing')
        >>> log.warning("Native create failed", context={'name': 'src'})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _buffer: Optional[LogBufferHandler] = None
    _configured = False

    def __new__(cls, subsystem: str = 'workspace') -> 'Logger':
        with cls._lock:
            instance = cls._instances.get(subsystem)
            if instance is None:
                instance = super().__new__(cls)
                instance._subsystem = subsystem
                instance._logger = logging.getLogger(f'{ROOT_LOGGER}.{subsystem}')
                cls._instances[subsystem] = instance
            return instance

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.INFO,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True
    ) -> None:
        """
        Attach handlers to the 'studiofs' logger. Only the first call has
        an effect.

        Args:
            level: Minimum level for every handler
            log_file: Also append records to this file
            use_colors: Colour level names on a terminal
            console_output: Write records to stderr
        """
        with cls._lock:
            if cls._configured:
                return

            base = logging.getLogger(ROOT_LOGGER)
            base.setLevel(level)

            handlers: List[logging.Handler] = []
            cls._buffer = LogBufferHandler()
            handlers.append(cls._buffer)

            # stdout belongs to command output
            if console_output:
                console = logging.StreamHandler(sys.stderr)
                console.setFormatter(LogFormatter(use_colors=use_colors))
                handlers.append(console)
            else:
                base.propagate = False

            if log_file:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file, encoding='utf-8')
                file_handler.setFormatter(LogFormatter(use_colors=False))
                handlers.append(file_handler)

            for handler in handlers:
                handler.setLevel(level)
                base.addHandler(handler)

            cls._configured = True

    @classmethod
    def get_logs(
        cls,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Records kept in memory since initialize(); empty before it."""
        if cls._buffer is None:
            return []
        return cls._buffer.get_logs(level=level, subsystem=subsystem, limit=limit)

    def _extra(self, context: Optional[dict[str, Any]]) -> dict[str, Any]:
        return {'subsystem': self._subsystem, 'context': context or {}}

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        self._logger.log(level, message, extra=self._extra(context))

    debug = partialmethod(_log, LogLevel.DEBUG)
    info = partialmethod(_log, LogLevel.INFO)
    warning = partialmethod(_log, LogLevel.WARNING)
    error = partialmethod(_log, LogLevel.ERROR)
    critical = partialmethod(_log, LogLevel.CRITICAL)

    def exception(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log at ERROR with the traceback of ``exc`` (or the one being handled)."""
        self._logger.error(
            message,
            exc_info=exc if exc is not None else True,
            extra=self._extra(context)
        )


def get_logger(subsystem: str) -> Logger:
    """Logger for ``subsystem``."""
    return Logger(subsystem)
