import collections
import datetime
import logging
import traceback
import typing

import ghdash.errors.models as error_models

logger = logging.getLogger(__name__)
sink_logger = logging.getLogger("ghdash.errors")

REDACTED = "[REDACTED]"
SECRET_CONTEXT_KEYS = frozenset({"token"})
DEFAULT_MAX_LOG_SIZE = 100

type Listener = typing.Callable[[error_models.LoggedEntry], None]
type Clock = typing.Callable[[], datetime.datetime]


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.UTC)


def sanitize_context(context: typing.Mapping[str, typing.Any]) -> error_models.ErrorContext:
    sanitized: error_models.ErrorContext = {}
    for key, value in context.items():
        if key in SECRET_CONTEXT_KEYS:
            sanitized[key] = REDACTED
        elif isinstance(value, typing.Mapping):
            sanitized[key] = sanitize_context(typing.cast(typing.Mapping[str, typing.Any], value))
        else:
            sanitized[key] = value

    return sanitized


def _format_stack(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class ErrorService:
    """
    Central error classifier.

    Every reported entry is sanitized, stored in a bounded ring log, emitted to the
    `ghdash.errors` logger and dispatched to subscribed listeners. Reporting never
    raises.
    """

    def __init__(
        self,
        max_log_size: int = DEFAULT_MAX_LOG_SIZE,
        clock: Clock = _utc_now,
    ) -> None:
        self._log: collections.deque[error_models.LoggedEntry] = collections.deque(maxlen=max_log_size)
        self._listeners: list[Listener] = []
        self._clock = clock

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_log(self) -> list[error_models.LoggedEntry]:
        return list(self._log)

    def clear_log(self) -> None:
        self._log.clear()

    def report(
        self,
        message: str,
        source_error: BaseException | None = None,
        category: error_models.ErrorCategory = error_models.ErrorCategory.API,
        severity: error_models.ErrorSeverity = error_models.ErrorSeverity.ERROR,
        context: typing.Mapping[str, typing.Any] | None = None,
    ) -> error_models.LoggedEntry:
        try:
            entry = error_models.LoggedEntry(
                message=message,
                timestamp=self._clock(),
                category=category,
                severity=severity,
                context=sanitize_context(context or {}),
                stack=_format_stack(source_error) if source_error is not None else None,
            )
        except Exception:
            logger.exception("Failed to build error entry for message(%s)", message)
            entry = error_models.LoggedEntry(
                message=message,
                timestamp=_utc_now(),
                category=category,
                severity=severity,
            )

        self._log.append(entry)
        self._emit(entry, source_error)
        self._notify(entry)

        return entry

    def report_exception(
        self,
        error: BaseException,
        message: str | None = None,
        severity: error_models.ErrorSeverity | None = None,
        context: typing.Mapping[str, typing.Any] | None = None,
    ) -> error_models.LoggedEntry:
        category = classify(error)
        if severity is None:
            severity = (
                error_models.ErrorSeverity.WARNING
                if category == error_models.ErrorCategory.RATE_LIMIT
                else error_models.ErrorSeverity.ERROR
            )

        return self.report(
            message or str(error) or error.__class__.__name__,
            source_error=error,
            category=category,
            severity=severity,
            context=context,
        )

    def _emit(self, entry: error_models.LoggedEntry, source_error: BaseException | None) -> None:
        try:
            sink_logger.log(
                entry.severity.log_level,
                "[%s] [%s] %s %s",
                entry.severity.value.upper(),
                entry.category.value,
                entry.message,
                entry.context,
                exc_info=source_error,
            )
        except Exception:
            logger.exception("Failed to emit error entry")

    def _notify(self, entry: error_models.LoggedEntry) -> None:
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception:
                logger.exception("Error in error listener %r", listener)


def classify(error: BaseException) -> error_models.ErrorCategory:
    category = getattr(error, "category", None)
    if isinstance(category, error_models.ErrorCategory):
        return category

    return error_models.ErrorCategory.NETWORK


__all__ = [
    "ErrorService",
    "Listener",
    "REDACTED",
    "classify",
    "sanitize_context",
]
