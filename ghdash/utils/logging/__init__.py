from .config import LoggerConfig, LoggingConfig, LogLevel, create_config, initialize
from .formatters import SecretFormatter, mask_secrets, register_secret, unregister_secret

__all__ = [
    "LogLevel",
    "LoggerConfig",
    "LoggingConfig",
    "SecretFormatter",
    "create_config",
    "initialize",
    "mask_secrets",
    "register_secret",
    "unregister_secret",
]
