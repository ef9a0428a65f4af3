import logging

import pydantic

import ghdash.cache as dashboard_cache
import ghdash.errors as errors
import ghdash.github.services as github_services
import ghdash.storage as dashboard_storage
import ghdash.utils.json as json_utils
import ghdash.utils.pydantic as pydantic_utils

logger = logging.getLogger(__name__)

DEFAULT_TUNABLES_KEY = "gh-dashboard-tunables"


class Tunables(pydantic_utils.BaseModel):
    ttl_minutes: dict[dashboard_cache.Partition, pydantic.PositiveFloat] = pydantic.Field(default_factory=dict)
    repository_concurrency: pydantic.PositiveInt | None = None
    pull_request_concurrency: pydantic.PositiveInt | None = None
    page_size: pydantic.PositiveInt | None = None


class TunablesService:
    """
    User adjustable overrides layered over the settings.

    A tunables record that cannot be read or parsed is reported and ignored,
    the settings stay in effect.
    """

    def __init__(
        self,
        storage_backend: dashboard_storage.StorageProtocol,
        error_service: errors.ErrorService,
        cache_store: dashboard_cache.TypedCacheStore,
        dashboard: github_services.GithubDashboard,
        key: str = DEFAULT_TUNABLES_KEY,
    ) -> None:
        self._storage = storage_backend
        self._error_service = error_service
        self._cache_store = cache_store
        self._dashboard = dashboard
        self._key = key

    async def load(self) -> Tunables:
        try:
            raw = await self._storage.get(self._key)
            if raw is None:
                logger.info("No tunables were found in Key(%s)", self._key)
                return Tunables()

            tunables = Tunables.model_validate(json_utils.loads_str(raw))
        except (ValueError, OSError) as error:
            self._error_service.report(
                "Stored tunables are invalid and have been ignored",
                source_error=error,
                category=errors.ErrorCategory.CONFIG,
                severity=errors.ErrorSeverity.WARNING,
                context={"key": self._key},
            )
            return Tunables()

        self.apply(tunables)
        return tunables

    async def save(self, tunables: Tunables) -> None:
        await self._storage.set(self._key, tunables.model_dump_json(exclude_none=True))
        self.apply(tunables)

    def apply(self, tunables: Tunables) -> None:
        for partition, minutes in tunables.ttl_minutes.items():
            self._cache_store.configure_ttl(partition, minutes)

        if tunables.repository_concurrency is not None:
            self._dashboard.pull_request_service.repository_concurrency = tunables.repository_concurrency
        if tunables.pull_request_concurrency is not None:
            self._dashboard.pull_request_service.pull_request_concurrency = tunables.pull_request_concurrency
        if tunables.page_size is not None:
            self._dashboard.repository_service.page_size = tunables.page_size

        logger.info("Tunables have been applied: %s", tunables.model_dump(exclude_none=True))


__all__ = [
    "DEFAULT_TUNABLES_KEY",
    "Tunables",
    "TunablesService",
]
