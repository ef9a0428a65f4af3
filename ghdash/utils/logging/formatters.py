import logging

# secret value -> name shown in its place
_SECRETS: dict[str, str] = {}


def register_secret(value: str, replace_value: str) -> None:
    if not value:
        return

    _SECRETS[value] = replace_value


def unregister_secret(value: str) -> None:
    _SECRETS.pop(value, None)


def mask_secrets(message: str) -> str:
    # a secret containing another one must be masked first
    for value in sorted(_SECRETS, key=len, reverse=True):
        if value in message:
            message = message.replace(value, f"***{_SECRETS[value]}***")

    return message


class SecretFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return mask_secrets(super().format(record))


__all__ = [
    "SecretFormatter",
    "mask_secrets",
    "register_secret",
    "unregister_secret",
]
