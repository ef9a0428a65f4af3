import typing

import ghdash.errors as errors


class AggregationError(Exception):
    def __init__(self, message: str, *args: typing.Any) -> None:
        super().__init__(message, *args)
        self.message = message

    @property
    def category(self) -> errors.ErrorCategory:
        if self.__cause__ is None:
            return errors.ErrorCategory.API
        return errors.classify(self.__cause__)


__all__ = [
    "AggregationError",
]
