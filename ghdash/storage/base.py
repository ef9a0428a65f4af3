import abc
import dataclasses
import typing

import ghdash.utils.pydantic as pydantic_utils


class StorageProtocol(typing.Protocol):
    async def dispose(self) -> None: ...

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def clear(self, key: str) -> None: ...


class BaseStorageSettings(pydantic_utils.TypedBaseModel): ...


class BaseStorage[SettingsT: BaseStorageSettings](abc.ABC):
    @classmethod
    @abc.abstractmethod
    def from_settings(cls, settings: SettingsT) -> typing.Self: ...

    async def dispose(self) -> None: ...

    @abc.abstractmethod
    async def get(self, key: str) -> str | None: ...

    @abc.abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    @abc.abstractmethod
    async def clear(self, key: str) -> None: ...


@dataclasses.dataclass
class RegistryRecord[SettingsT: BaseStorageSettings]:
    settings_class: type[SettingsT]
    storage_class: type[BaseStorage[SettingsT]]


_REGISTRY: dict[str, RegistryRecord[typing.Any]] = {}


def register_storage_backend[SettingsT: BaseStorageSettings](
    name: str,
    settings_class: type[SettingsT],
    storage_class: type[BaseStorage[SettingsT]],
) -> None:
    _REGISTRY[name] = RegistryRecord(
        settings_class=settings_class,
        storage_class=storage_class,
    )


def storage_settings_factory(data: typing.Any) -> BaseStorageSettings:
    if isinstance(data, BaseStorageSettings):
        return data

    if not isinstance(data, dict):
        raise ValueError("Storage settings must be a dict")
    if "type" not in data:
        raise ValueError("Storage settings must have a 'type' key")
    if data["type"] not in _REGISTRY:
        raise ValueError(f"Unknown storage type: {data['type']}")

    settings_class = _REGISTRY[data["type"]].settings_class
    return settings_class.model_validate(data)


def storage_factory(settings: BaseStorageSettings) -> StorageProtocol:
    storage_class = _REGISTRY[settings.type_name].storage_class
    return storage_class.from_settings(settings)


__all__ = [
    "BaseStorage",
    "BaseStorageSettings",
    "StorageProtocol",
    "register_storage_backend",
    "storage_factory",
    "storage_settings_factory",
]
