import asyncio
import contextlib
import logging
import typing

import ghdash.cache.models as cache_models
import ghdash.cache.store as cache_store
import ghdash.errors as errors
import ghdash.storage as storage
import ghdash.utils.json as json_utils

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "gh-dashboard-cache"
DEFAULT_DEBOUNCE_SECONDS = 5.0
DEFAULT_PERSISTED_PARTITIONS = (cache_models.Partition.USER, cache_models.Partition.ORGANIZATION)


class CacheSnapshotService:
    """
    Persists slow-changing cache partitions to durable storage.

    Writes are debounced: a burst of cache writes results in a single dump once
    the store has been quiet for `debounce_seconds`.
    """

    def __init__(
        self,
        store: cache_store.TypedCacheStore,
        storage_backend: storage.StorageProtocol,
        error_service: errors.ErrorService,
        persisted_partitions: typing.Iterable[cache_models.Partition] = DEFAULT_PERSISTED_PARTITIONS,
        snapshot_key: str = DEFAULT_SNAPSHOT_KEY,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._store = store
        self._storage = storage_backend
        self._error_service = error_service
        self._persisted_partitions = tuple(persisted_partitions)
        self._snapshot_key = snapshot_key
        self._debounce_seconds = debounce_seconds

        self._pending_dump: asyncio.Task[bool] | None = None
        self._dirty = False

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def attach(self) -> None:
        self._store.subscribe(self._on_change)

    def _on_change(self, partition: cache_models.Partition) -> None:
        if partition in self._persisted_partitions:
            self.schedule()

    def schedule(self) -> None:
        self._dirty = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, cache snapshot is deferred until flush")
            return

        if self._pending_dump is not None and not self._pending_dump.done():
            self._pending_dump.cancel()
        self._pending_dump = loop.create_task(self._dump_later())

    async def _dump_later(self) -> bool:
        await asyncio.sleep(self._debounce_seconds)
        return await self.dump()

    async def dump(self) -> bool:
        # reset up front so a change made while writing marks the snapshot dirty again
        self._dirty = False
        try:
            payload = {
                partition.value: [
                    [key, entry.model_dump(mode="json")] for key, entry in self._store.entries(partition)
                ]
                for partition in self._persisted_partitions
            }
            await self._storage.set(self._snapshot_key, json_utils.dumps_str(payload))
        except Exception as error:
            self._dirty = True
            self._error_service.report(
                "Failed to persist cache snapshot",
                source_error=error,
                category=errors.ErrorCategory.CACHE,
                severity=errors.ErrorSeverity.WARNING,
                context={"snapshot_key": self._snapshot_key},
            )
            return False

        logger.debug("Cache snapshot has been saved to Key(%s)", self._snapshot_key)
        return True

    async def load(self) -> int:
        try:
            raw = await self._storage.get(self._snapshot_key)
            if raw is None:
                logger.info("No cache snapshot was found in Key(%s)", self._snapshot_key)
                return 0

            payload = json_utils.loads_str(raw)
            if not isinstance(payload, dict):
                raise ValueError("Cache snapshot must be a JSON object")

            restored = 0
            for partition in self._persisted_partitions:
                for key, raw_entry in payload.get(partition.value, []):
                    entry = cache_models.CacheEntry.model_validate(raw_entry)
                    if self._store.restore(partition, key, entry):
                        restored += 1
        except Exception as error:
            self._error_service.report(
                "Failed to load cache snapshot",
                source_error=error,
                category=errors.ErrorCategory.CACHE,
                severity=errors.ErrorSeverity.WARNING,
                context={"snapshot_key": self._snapshot_key},
            )
            return 0

        logger.info("%s cache entries have been restored from Key(%s)", restored, self._snapshot_key)
        return restored

    async def flush(self) -> None:
        if self._pending_dump is not None and not self._pending_dump.done():
            self._pending_dump.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._pending_dump
        self._pending_dump = None

        if self._dirty:
            await self.dump()


__all__ = [
    "CacheSnapshotService",
    "DEFAULT_PERSISTED_PARTITIONS",
    "DEFAULT_SNAPSHOT_KEY",
]
