from .jobs import CacheSweepJob
from .models import (
    ALL_PARTITIONS,
    DEFAULT_PARTITION_SETTINGS,
    CacheEntry,
    CacheStats,
    ClearTarget,
    Partition,
    PartitionSettings,
    PartitionStats,
)
from .snapshot import DEFAULT_PERSISTED_PARTITIONS, DEFAULT_SNAPSHOT_KEY, CacheSnapshotService
from .store import ChangeListener, Clock, TypedCacheStore

__all__ = [
    "ALL_PARTITIONS",
    "CacheEntry",
    "CacheSnapshotService",
    "CacheStats",
    "CacheSweepJob",
    "ChangeListener",
    "ClearTarget",
    "Clock",
    "DEFAULT_PARTITION_SETTINGS",
    "DEFAULT_PERSISTED_PARTITIONS",
    "DEFAULT_SNAPSHOT_KEY",
    "Partition",
    "PartitionSettings",
    "PartitionStats",
    "TypedCacheStore",
]
