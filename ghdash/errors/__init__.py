from .models import ErrorCategory, ErrorContext, ErrorSeverity, LoggedEntry
from .service import REDACTED, ErrorService, Listener, classify, sanitize_context

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ErrorService",
    "ErrorSeverity",
    "Listener",
    "LoggedEntry",
    "REDACTED",
    "classify",
    "sanitize_context",
]
