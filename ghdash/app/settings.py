import os
import typing
import warnings

import pydantic
import pydantic_settings

import ghdash.cache as dashboard_cache
import ghdash.github.clients as github_clients
import ghdash.storage as dashboard_storage
import ghdash.utils.aiojobs as aiojobs_utils
import ghdash.utils.logging as logging_utils


class AppSettings(pydantic_settings.BaseSettings):
    env: str = "production"
    debug: bool = False

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_debug(self) -> bool:
        if not self.is_development:
            warnings.warn("APP_DEBUG is True in non-development environment", UserWarning)

        return self.debug


class LoggingSettings(pydantic_settings.BaseSettings):
    level: logging_utils.LogLevel = "INFO"
    format: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class GithubSettings(pydantic_settings.BaseSettings):
    token: str = ""
    base_url: str = github_clients.rest.DEFAULT_BASE_URL
    rate_limit_warning_threshold: pydantic.NonNegativeInt = github_clients.rest.DEFAULT_RATE_LIMIT_WARNING_THRESHOLD
    back_pressure_partitions: list[dashboard_cache.Partition] = pydantic.Field(
        default_factory=lambda: list(github_clients.rest.DEFAULT_BACK_PRESSURE_PARTITIONS)
    )


def _default_ttl_minutes() -> dict[dashboard_cache.Partition, float]:
    return {partition: item.ttl_minutes for partition, item in dashboard_cache.DEFAULT_PARTITION_SETTINGS.items()}


def _default_max_entries() -> dict[dashboard_cache.Partition, int]:
    return {partition: item.max_entries for partition, item in dashboard_cache.DEFAULT_PARTITION_SETTINGS.items()}


class CacheSettings(pydantic_settings.BaseSettings):
    ttl_minutes: dict[dashboard_cache.Partition, pydantic.PositiveFloat] = pydantic.Field(
        default_factory=_default_ttl_minutes
    )
    max_entries: dict[dashboard_cache.Partition, pydantic.PositiveInt] = pydantic.Field(
        default_factory=_default_max_entries
    )
    sweep_interval_seconds: pydantic.PositiveFloat = 5 * 60
    persist_debounce_seconds: pydantic.NonNegativeFloat = 5
    persisted_partitions: list[dashboard_cache.Partition] = pydantic.Field(
        default_factory=lambda: list(dashboard_cache.DEFAULT_PERSISTED_PARTITIONS)
    )
    snapshot_key: str = dashboard_cache.DEFAULT_SNAPSHOT_KEY

    @property
    def partition_settings(self) -> dict[dashboard_cache.Partition, dashboard_cache.PartitionSettings]:
        result: dict[dashboard_cache.Partition, dashboard_cache.PartitionSettings] = {}
        for partition, defaults in dashboard_cache.DEFAULT_PARTITION_SETTINGS.items():
            result[partition] = dashboard_cache.PartitionSettings(
                ttl_minutes=self.ttl_minutes.get(partition, defaults.ttl_minutes),
                max_entries=self.max_entries.get(partition, defaults.max_entries),
            )
        return result


class PipelineSettings(pydantic_settings.BaseSettings):
    repository_concurrency: pydantic.PositiveInt = 8
    pull_request_concurrency: pydantic.PositiveInt = 4
    workflow_concurrency: pydantic.PositiveInt = 4
    page_size: pydantic.PositiveInt = 100
    active_repositories_limit: pydantic.PositiveInt = 20


class SchedulerSettings(pydantic_settings.BaseSettings):
    limit: int = 100
    pending_limit: int = 0  # 0 means no limit
    close_timeout: int = 10

    @property
    def aiojobs_scheduler_settings(self) -> aiojobs_utils.Settings:
        return aiojobs_utils.Settings(
            limit=self.limit,
            pending_limit=self.pending_limit,
            close_timeout=self.close_timeout,
        )


class Settings(pydantic_settings.BaseSettings):
    app: AppSettings = pydantic.Field(default_factory=AppSettings)
    logs: LoggingSettings = pydantic.Field(default_factory=LoggingSettings)
    github: GithubSettings = pydantic.Field(default_factory=GithubSettings)
    cache: CacheSettings = pydantic.Field(default_factory=CacheSettings)
    storage: typing.Annotated[
        dashboard_storage.BaseStorageSettings,
        pydantic.BeforeValidator(dashboard_storage.storage_settings_factory),
    ] = pydantic.Field(default_factory=dashboard_storage.MemoryStorageSettings)
    pipelines: PipelineSettings = pydantic.Field(default_factory=PipelineSettings)
    scheduler: SchedulerSettings = pydantic.Field(default_factory=SchedulerSettings)

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="GITHUB_DASHBOARD_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[pydantic_settings.BaseSettings],
        init_settings: pydantic_settings.PydanticBaseSettingsSource,
        env_settings: pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[pydantic_settings.PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            pydantic_settings.YamlConfigSettingsSource(
                settings_cls,
                yaml_file=os.environ.get("GITHUB_DASHBOARD_SETTINGS_YAML", None),
            ),
        )


__all__ = [
    "AppSettings",
    "CacheSettings",
    "GithubSettings",
    "LoggingSettings",
    "PipelineSettings",
    "SchedulerSettings",
    "Settings",
]
