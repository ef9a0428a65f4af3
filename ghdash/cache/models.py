import datetime
import enum
import typing

import pydantic

import ghdash.utils.pydantic as pydantic_utils


class Partition(str, enum.Enum):
    PULL_REQUEST = "PULL_REQUEST"
    REPOSITORY = "REPOSITORY"
    ORGANIZATION = "ORGANIZATION"
    USER = "USER"
    WORKFLOW_RUN = "WORKFLOW_RUN"


ALL_PARTITIONS: typing.Final = "ALL"
type ClearTarget = Partition | typing.Literal["ALL"]


class PartitionSettings(pydantic_utils.BaseModel):
    ttl_minutes: pydantic.PositiveFloat
    max_entries: pydantic.PositiveInt


DEFAULT_PARTITION_SETTINGS: dict[Partition, PartitionSettings] = {
    Partition.PULL_REQUEST: PartitionSettings(ttl_minutes=60, max_entries=500),
    Partition.REPOSITORY: PartitionSettings(ttl_minutes=120, max_entries=200),
    Partition.ORGANIZATION: PartitionSettings(ttl_minutes=240, max_entries=20),
    Partition.USER: PartitionSettings(ttl_minutes=24 * 60, max_entries=100),
    Partition.WORKFLOW_RUN: PartitionSettings(ttl_minutes=30, max_entries=100),
}


class CacheEntry(pydantic_utils.BaseModel):
    data: typing.Any
    created_at: datetime.datetime
    last_accessed: datetime.datetime
    expires_at: datetime.datetime
    partition: Partition

    def is_expired(self, now: datetime.datetime) -> bool:
        return now >= self.expires_at


class PartitionStats(pydantic_utils.BaseModel):
    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0


class CacheStats(pydantic_utils.BaseModel):
    hits: int
    misses: int
    sets: int
    evictions: int
    by_partition: dict[Partition, PartitionStats]
    size: dict[Partition, int]

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0

        return self.hits / total


__all__ = [
    "ALL_PARTITIONS",
    "CacheEntry",
    "CacheStats",
    "ClearTarget",
    "DEFAULT_PARTITION_SETTINGS",
    "Partition",
    "PartitionSettings",
    "PartitionStats",
]
