"""JSON-lines logging on stderr, one logger per component of the ksuid tools."""

import json
import sys
import threading
from enum import IntEnum

from utils.timestamp import format_timestamp


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40  # threshold only: silences everything the tools emit

    @classmethod
    def parse(cls, name):
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


_root = None
_root_lock = threading.Lock()


class StructuredLogger:
    """
    Writes one JSON object per record to stderr.

    Records carry the timestamp, level, message, the logger's component and
    any bound fields, then the per-call fields. Values that JSON cannot hold
    (a Ksuid, a datetime) are written with str().
    """

    def __init__(self, level=LogLevel.INFO, component=None, **fields):
        self.level = level
        self.component = component
        self.fields = fields

    def bind(self, component=None, **fields):
        """Child logger sharing this level, with extra fields on every record."""
        return StructuredLogger(self.level, component or self.component, **{**self.fields, **fields})

    def _emit(self, level, message, error=None, **kwargs):
        if level < self.level:
            return
        record = {"timestamp": format_timestamp(), "level": level.name, "msg": message}
        if self.component:
            record["component"] = self.component
        record.update(self.fields)
        record.update(kwargs)
        if error is not None:
            record["err"] = str(error)
        try:
            sys.stderr.write(json.dumps(record, default=str) + "\n")
            sys.stderr.flush()
        except (OSError, ValueError):
            # stderr already closed
            pass

    def debug(self, message, **kwargs):
        self._emit(LogLevel.DEBUG, message, **kwargs)

    def info(self, message, **kwargs):
        self._emit(LogLevel.INFO, message, **kwargs)

    def warn(self, message, error=None, **kwargs):
        self._emit(LogLevel.WARN, message, error, **kwargs)

    @classmethod
    def configure(cls, min_level=LogLevel.INFO):
        global _root
        with _root_lock:
            _root = cls(min_level)


def get_logger(component=None):
    """Root logger, or a child bound to `component` ("cli", "generator", ...)."""
    global _root
    if _root is None:
        with _root_lock:
            if _root is None:
                _root = StructuredLogger()
    return _root.bind(component) if component else _root
