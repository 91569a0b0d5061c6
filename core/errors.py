"""Custom errors with context for tracking."""

from utils.timestamp import format_timestamp


class KsuidError(Exception):
    """Base error with context and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.message = message
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause


class InvalidArgument(KsuidError, ValueError):
    """Input violates a KSUID invariant (length, alphabet, range)."""

    def __init__(self, message, expected=None, actual=None, **kwargs):
        context = kwargs.pop("context", {})
        if expected is not None:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual
        super().__init__(message, context=context, **kwargs)
