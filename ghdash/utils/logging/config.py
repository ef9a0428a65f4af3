import dataclasses
import logging.config
import typing

import ghdash.utils.logging.formatters as formatters

type LogLevel = typing.Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
type LoggingConfig = dict[str, typing.Any]


@dataclasses.dataclass(frozen=True)
class LoggerConfig:
    propagate: bool
    level: LogLevel
    handlers: list[str] = dataclasses.field(default_factory=lambda: ["console"])


def create_config(
    log_level: LogLevel,
    log_format: str,
    loggers: dict[str, LoggerConfig] | None = None,
) -> LoggingConfig:
    loggers = loggers or {}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": formatters.SecretFormatter,
                "fmt": log_format,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "console",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
        "loggers": {
            name: {
                "propagate": logger_config.propagate,
                "level": logger_config.level,
                "handlers": logger_config.handlers,
            }
            for name, logger_config in loggers.items()
        },
    }


def initialize(config: LoggingConfig) -> None:
    logging.config.dictConfig(config)


__all__ = [
    "LogLevel",
    "LoggerConfig",
    "LoggingConfig",
    "create_config",
    "initialize",
]
