import typing


class ApplicationError(Exception):
    def __init__(self, message: str, *args: typing.Any) -> None:
        super().__init__(message, *args)
        self.message = message


class StartError(ApplicationError):
    pass


class DisposeError(ApplicationError):
    pass


__all__ = [
    "ApplicationError",
    "DisposeError",
    "StartError",
]
