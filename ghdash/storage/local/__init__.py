from .file import LocalDirStorage, LocalDirStorageSettings
from .memory import MemoryStorage, MemoryStorageSettings

__all__ = [
    "LocalDirStorage",
    "LocalDirStorageSettings",
    "MemoryStorage",
    "MemoryStorageSettings",
]
