import logging

import ghdash.storage as storage

logger = logging.getLogger(__name__)


def register_default_plugins() -> None:
    logger.info("Registering default plugins")
    storage.register_default_plugins()


__all__ = [
    "register_default_plugins",
]
