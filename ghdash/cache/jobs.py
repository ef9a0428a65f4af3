import logging

import ghdash.cache.store as cache_store
import ghdash.utils.aiojobs as aiojobs_utils

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 5 * 60
RETRY_TIMEOUT = 60


class CacheSweepJob(aiojobs_utils.PeriodicJob):
    def __init__(
        self,
        store: cache_store.TypedCacheStore,
        interval: float = DEFAULT_SWEEP_INTERVAL,
    ):
        self._store = store

        super().__init__(
            logger=logger,
            interval=interval,
            retry_timeout=RETRY_TIMEOUT,
        )

    async def _process(self) -> None:
        removed = self._store.sweep()
        if removed > 0:
            logger.info("Cache sweep has removed %s expired entries", removed)


__all__ = [
    "CacheSweepJob",
]
