import logging
import pathlib
import typing

import aiofile
import pydantic

import ghdash.storage.base as storage_base

logger = logging.getLogger(__name__)


class LocalDirStorageSettings(storage_base.BaseStorageSettings):
    type_name: typing.Literal["local_dir"] = pydantic.Field(default="local_dir", alias="type")
    path: str


class LocalDirStorage(storage_base.BaseStorage[LocalDirStorageSettings]):
    def __init__(self, root_path: str):
        self._root_path: pathlib.Path = pathlib.Path(root_path)

    @classmethod
    def from_settings(cls, settings: LocalDirStorageSettings) -> typing.Self:
        return cls(root_path=settings.path)

    def _key_path(self, key: str) -> pathlib.Path:
        return self._root_path.joinpath(key)

    async def get(self, key: str) -> str | None:
        logger.debug("Loading Key(%s)", key)
        try:
            async with aiofile.async_open(str(self._key_path(key)), "r") as file:
                data = await file.read()
        except FileNotFoundError:
            logger.debug("No Key(%s) was found", key)
            return None

        if data == "":
            logger.debug("Found empty Key(%s)", key)
            return None

        return data

    async def set(self, key: str, value: str) -> None:
        logger.debug("Saving Key(%s)", key)
        path = self._key_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofile.async_open(str(path), "w+") as file:
            await file.write(value)

    async def clear(self, key: str) -> None:
        logger.debug("Clearing Key(%s)", key)
        try:
            self._key_path(key).unlink()
        except FileNotFoundError:
            pass


__all__ = [
    "LocalDirStorage",
    "LocalDirStorageSettings",
]
