import dataclasses
import datetime
import enum
import logging
import typing


class ErrorCategory(str, enum.Enum):
    NETWORK = "network"
    API = "api"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    CACHE = "cache"
    RENDER = "render"
    CONFIG = "config"


class ErrorSeverity(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS: dict[ErrorSeverity, int] = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}

type ErrorContext = dict[str, typing.Any]


@dataclasses.dataclass(frozen=True)
class LoggedEntry:
    message: str
    timestamp: datetime.datetime
    category: ErrorCategory
    severity: ErrorSeverity
    context: ErrorContext = dataclasses.field(default_factory=dict)
    stack: str | None = None


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "LoggedEntry",
]
