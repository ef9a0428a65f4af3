from .base import (
    BaseStorage,
    BaseStorageSettings,
    StorageProtocol,
    register_storage_backend,
    storage_factory,
    storage_settings_factory,
)
from .local import LocalDirStorage, LocalDirStorageSettings, MemoryStorage, MemoryStorageSettings
from .plugin_registration import register_default_plugins

__all__ = [
    "BaseStorage",
    "BaseStorageSettings",
    "LocalDirStorage",
    "LocalDirStorageSettings",
    "MemoryStorage",
    "MemoryStorageSettings",
    "StorageProtocol",
    "register_default_plugins",
    "register_storage_backend",
    "storage_factory",
    "storage_settings_factory",
]
