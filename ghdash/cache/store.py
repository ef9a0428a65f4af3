import datetime
import logging
import math
import typing

import ghdash.cache.models as cache_models

logger = logging.getLogger(__name__)

DEFAULT_EVICTION_RATIO = 0.1

type Clock = typing.Callable[[], datetime.datetime]
type ChangeListener = typing.Callable[[cache_models.Partition], None]


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.UTC)


class TypedCacheStore:
    """
    In-memory cache partitioned by resource type.

    Each partition has its own default TTL and capacity. Reaching the capacity
    evicts the least recently accessed entries before the new one is inserted.
    No method suspends, so a read followed by a write is atomic for other tasks
    as long as the caller does not await in between.
    """

    def __init__(
        self,
        partition_settings: typing.Mapping[cache_models.Partition, cache_models.PartitionSettings] | None = None,
        clock: Clock = _utc_now,
        eviction_ratio: float = DEFAULT_EVICTION_RATIO,
    ) -> None:
        settings = dict(cache_models.DEFAULT_PARTITION_SETTINGS)
        settings.update(partition_settings or {})

        self._clock = clock
        self._eviction_ratio = eviction_ratio
        self._configured_ttl: dict[cache_models.Partition, float] = {
            partition: item.ttl_minutes for partition, item in settings.items()
        }
        self._default_ttl = dict(self._configured_ttl)
        self._max_entries: dict[cache_models.Partition, int] = {
            partition: item.max_entries for partition, item in settings.items()
        }
        self._partitions: dict[cache_models.Partition, dict[str, cache_models.CacheEntry]] = {
            partition: {} for partition in cache_models.Partition
        }
        self._stats: dict[cache_models.Partition, cache_models.PartitionStats] = {
            partition: cache_models.PartitionStats() for partition in cache_models.Partition
        }
        self._listeners: list[ChangeListener] = []

    def now(self) -> datetime.datetime:
        return self._clock()

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def get(self, partition: cache_models.Partition, key: str) -> cache_models.CacheEntry | None:
        entries = self._partitions[partition]
        stats = self._stats[partition]
        now = self._clock()

        entry = entries.get(key)
        if entry is None:
            stats.misses += 1
            return None

        if entry.is_expired(now):
            del entries[key]
            stats.misses += 1
            logger.debug("Expired Entry(%s) removed from Partition(%s)", key, partition.value)
            return None

        entry.last_accessed = now
        stats.hits += 1
        return entry

    def set(
        self,
        partition: cache_models.Partition,
        key: str,
        data: typing.Any,
        ttl_minutes: float | None = None,
    ) -> cache_models.CacheEntry:
        entries = self._partitions[partition]
        now = self._clock()

        if ttl_minutes is None:
            ttl_minutes = self._default_ttl[partition]

        if key not in entries and len(entries) >= self._max_entries[partition]:
            self._evict_lru(partition)

        entry = cache_models.CacheEntry(
            data=data,
            created_at=now,
            last_accessed=now,
            expires_at=now + datetime.timedelta(minutes=ttl_minutes),
            partition=partition,
        )
        entries[key] = entry
        self._stats[partition].sets += 1

        self._notify(partition)
        return entry

    def restore(self, partition: cache_models.Partition, key: str, entry: cache_models.CacheEntry) -> bool:
        entries = self._partitions[partition]
        if entry.is_expired(self._clock()):
            return False

        if key not in entries and len(entries) >= self._max_entries[partition]:
            self._evict_lru(partition)

        entries[key] = entry.model_copy(update={"partition": partition})
        return True

    def remove(self, partition: cache_models.Partition, key: str) -> bool:
        if self._partitions[partition].pop(key, None) is None:
            return False

        self._notify(partition)
        return True

    def clear_partition(self, target: cache_models.ClearTarget) -> None:
        if target == cache_models.ALL_PARTITIONS:
            for partition, entries in self._partitions.items():
                entries.clear()
                self._notify(partition)
            logger.info("All partitions have been cleared")
            return

        partition = cache_models.Partition(target)
        self._partitions[partition].clear()
        self._notify(partition)
        logger.info("Partition(%s) has been cleared", partition.value)

    def entries(self, partition: cache_models.Partition) -> list[tuple[str, cache_models.CacheEntry]]:
        return list(self._partitions[partition].items())

    def size(self, partition: cache_models.Partition) -> int:
        return len(self._partitions[partition])

    def max_entries(self, partition: cache_models.Partition) -> int:
        return self._max_entries[partition]

    def get_default_ttl(self, partition: cache_models.Partition) -> float:
        return self._default_ttl[partition]

    def get_configured_ttl(self, partition: cache_models.Partition) -> float:
        return self._configured_ttl[partition]

    def set_default_ttl(self, partition: cache_models.Partition, minutes: float) -> None:
        if minutes <= 0:
            raise ValueError(f"TTL must be positive, got {minutes}")

        if self._default_ttl[partition] != minutes:
            logger.info("Default TTL of Partition(%s) set to %s minutes", partition.value, minutes)
        self._default_ttl[partition] = minutes

    def configure_ttl(self, partition: cache_models.Partition, minutes: float) -> None:
        self.set_default_ttl(partition, minutes)
        self._configured_ttl[partition] = minutes

    def reset_default_ttl(self, partition: cache_models.Partition) -> None:
        self.set_default_ttl(partition, self._configured_ttl[partition])

    def sweep(self) -> int:
        now = self._clock()
        total_removed = 0

        for partition, entries in self._partitions.items():
            expired_keys = [key for key, entry in entries.items() if entry.is_expired(now)]
            for key in expired_keys:
                del entries[key]

            if expired_keys:
                logger.debug("Sweep removed %s expired entries from Partition(%s)", len(expired_keys), partition.value)
            total_removed += len(expired_keys)

        return total_removed

    def get_stats(self) -> cache_models.CacheStats:
        by_partition = {partition: stats.model_copy() for partition, stats in self._stats.items()}

        return cache_models.CacheStats(
            hits=sum(stats.hits for stats in by_partition.values()),
            misses=sum(stats.misses for stats in by_partition.values()),
            sets=sum(stats.sets for stats in by_partition.values()),
            evictions=sum(stats.evictions for stats in by_partition.values()),
            by_partition=by_partition,
            size={partition: len(entries) for partition, entries in self._partitions.items()},
        )

    def _evict_lru(self, partition: cache_models.Partition) -> None:
        entries = self._partitions[partition]
        if not entries:
            return

        # sorted() is stable, so equal access times evict in insertion order
        by_access = sorted(entries.items(), key=lambda item: item[1].last_accessed)
        evict_count = max(1, math.floor(len(by_access) * self._eviction_ratio))

        for key, _ in by_access[:evict_count]:
            del entries[key]

        self._stats[partition].evictions += evict_count
        logger.debug("Evicted %s LRU entries from Partition(%s)", evict_count, partition.value)

    def _notify(self, partition: cache_models.Partition) -> None:
        for listener in self._listeners:
            try:
                listener(partition)
            except Exception:
                logger.exception("Cache change listener %r has failed", listener)


__all__ = [
    "ChangeListener",
    "Clock",
    "TypedCacheStore",
]
