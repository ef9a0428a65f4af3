import logging
import typing

import pydantic

import ghdash.storage.base as storage_base

logger = logging.getLogger(__name__)


class MemoryStorageSettings(storage_base.BaseStorageSettings):
    type_name: typing.Literal["memory"] = pydantic.Field(default="memory", alias="type")


class MemoryStorage(storage_base.BaseStorage[MemoryStorageSettings]):
    def __init__(self, data: dict[str, str] | None = None):
        self._data: dict[str, str] = data if data is not None else {}

    @classmethod
    def from_settings(cls, settings: MemoryStorageSettings) -> typing.Self:
        return cls()

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        logger.debug("Saving Key(%s) to memory", key)
        self._data[key] = value

    async def clear(self, key: str) -> None:
        self._data.pop(key, None)


__all__ = [
    "MemoryStorage",
    "MemoryStorageSettings",
]
