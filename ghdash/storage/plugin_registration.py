import logging

import ghdash.storage.base as base
import ghdash.storage.local as local

logger = logging.getLogger(__name__)


def register_default_plugins() -> None:
    logger.info("Registering default storage plugins")
    base.register_storage_backend(
        name="memory",
        settings_class=local.MemoryStorageSettings,
        storage_class=local.MemoryStorage,
    )
    base.register_storage_backend(
        name="local_dir",
        settings_class=local.LocalDirStorageSettings,
        storage_class=local.LocalDirStorage,
    )


__all__ = [
    "register_default_plugins",
]
