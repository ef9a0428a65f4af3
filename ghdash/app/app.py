import dataclasses
import logging
import typing

import aiohttp

import ghdash.app.errors as app_errors
import ghdash.app.settings as app_settings
import ghdash.app.tunables as app_tunables
import ghdash.cache as dashboard_cache
import ghdash.errors as errors
import ghdash.github.clients as github_clients
import ghdash.github.services as github_services
import ghdash.plugin_registration as plugin_registration
import ghdash.storage as dashboard_storage
import ghdash.utils.aiojobs as aiojobs_utils
import ghdash.utils.lifecycle as lifecycle_utils
import ghdash.utils.logging as logging_utils

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Application:
    lifecycle: lifecycle_utils.Lifecycle
    error_service: errors.ErrorService
    cache_store: dashboard_cache.TypedCacheStore
    dashboard: github_services.GithubDashboard
    tunables_service: app_tunables.TunablesService

    @classmethod
    def from_settings(
        cls,
        settings: app_settings.Settings,
        aiohttp_client: aiohttp.ClientSession | None = None,
    ) -> typing.Self:
        log_level = "DEBUG" if settings.app.is_debug else settings.logs.level
        logging_config = logging_utils.create_config(
            log_level=log_level,
            log_format=settings.logs.format,
            loggers={
                "asyncio": logging_utils.LoggerConfig(
                    propagate=False,
                    level=log_level,
                ),
            },
        )
        logging_utils.initialize(config=logging_config)
        logging_utils.register_secret(settings.github.token, replace_value="github_token")
        logger.info("Logging has been initialized")

        logger.info("Initializing application")
        plugin_registration.register_default_plugins()

        lifecycle_startup_callbacks: list[lifecycle_utils.Callback] = []
        lifecycle_shutdown_callbacks: list[lifecycle_utils.Callback] = []

        logger.info("Initializing global dependencies")

        error_service = errors.ErrorService()

        aiojobs_scheduler = aiojobs_utils.Scheduler.from_settings(
            settings=settings.scheduler.aiojobs_scheduler_settings,
        )
        lifecycle_shutdown_callbacks.append(
            lifecycle_utils.Callback.from_dispose(
                name="aiojobs_scheduler",
                factory=aiojobs_scheduler.dispose,
            )
        )

        storage_backend = dashboard_storage.storage_factory(settings.storage)
        lifecycle_shutdown_callbacks.append(
            lifecycle_utils.Callback.from_dispose(
                name="storage",
                factory=storage_backend.dispose,
            )
        )
        logger.info("Storage has been initialized with type(%s)", settings.storage.type_name)

        logger.info("Initializing cache")

        cache_store = dashboard_cache.TypedCacheStore(
            partition_settings=settings.cache.partition_settings,
        )
        snapshot_service = dashboard_cache.CacheSnapshotService(
            store=cache_store,
            storage_backend=storage_backend,
            error_service=error_service,
            persisted_partitions=settings.cache.persisted_partitions,
            snapshot_key=settings.cache.snapshot_key,
            debounce_seconds=settings.cache.persist_debounce_seconds,
        )
        lifecycle_startup_callbacks.append(
            lifecycle_utils.Callback(
                factory=snapshot_service.load,
                error_message="Failed to load cache snapshot",
                success_message="Cache snapshot has been loaded successfully",
            )
        )
        lifecycle_shutdown_callbacks.append(
            lifecycle_utils.Callback.from_dispose(
                name="cache_snapshot",
                factory=snapshot_service.flush,
            )
        )

        logger.info("Initializing clients")

        if aiohttp_client is None:
            aiohttp_client = aiohttp.ClientSession()
        github_client = github_clients.RestGithubClient(
            aiohttp_client=aiohttp_client,
            token=settings.github.token,
            cache_store=cache_store,
            error_service=error_service,
            base_url=settings.github.base_url,
            rate_limit_warning_threshold=settings.github.rate_limit_warning_threshold,
            back_pressure_partitions=settings.github.back_pressure_partitions,
        )
        lifecycle_shutdown_callbacks.append(
            lifecycle_utils.Callback.from_dispose(
                name="github_client",
                factory=github_client.dispose,
            )
        )

        logger.info("Initializing services")

        dashboard = github_services.GithubDashboard.from_client(
            client=github_client,
            error_service=error_service,
            repository_concurrency=settings.pipelines.repository_concurrency,
            pull_request_concurrency=settings.pipelines.pull_request_concurrency,
            workflow_concurrency=settings.pipelines.workflow_concurrency,
            page_size=settings.pipelines.page_size,
            active_repositories_limit=settings.pipelines.active_repositories_limit,
        )
        tunables_service = app_tunables.TunablesService(
            storage_backend=storage_backend,
            error_service=error_service,
            cache_store=cache_store,
            dashboard=dashboard,
        )
        lifecycle_startup_callbacks.append(
            lifecycle_utils.Callback(
                factory=tunables_service.load,
                error_message="Failed to load tunables",
                success_message="Tunables have been loaded successfully",
            )
        )

        logger.info("Initializing jobs")

        aiojobs_scheduler.defer_jobs(
            dashboard_cache.CacheSweepJob(
                store=cache_store,
                interval=settings.cache.sweep_interval_seconds,
            ),
        )
        lifecycle_startup_callbacks.append(
            lifecycle_utils.Callback(
                factory=aiojobs_scheduler.spawn_deferred_jobs,
                error_message="Failed to spawn deferred jobs",
                success_message="Deferred jobs have been spawned successfully",
            )
        )
        # snapshot writes are scheduled only after the snapshot itself is loaded
        lifecycle_startup_callbacks.append(
            lifecycle_utils.Callback(
                factory=_as_coroutine(snapshot_service.attach),
                error_message="Failed to attach cache snapshot",
                success_message="Cache snapshot has been attached successfully",
            )
        )

        logger.info("Initializing lifecycle manager")

        lifecycle = lifecycle_utils.Lifecycle(
            logger=logger,
            startup_callbacks=lifecycle_startup_callbacks,
            shutdown_callbacks=list(reversed(lifecycle_shutdown_callbacks)),
        )

        logger.info("Creating application")
        application = cls(
            lifecycle=lifecycle,
            error_service=error_service,
            cache_store=cache_store,
            dashboard=dashboard,
            tunables_service=tunables_service,
        )

        logger.info("Initializing application finished")

        return application

    async def start(self) -> None:
        try:
            await self.lifecycle.on_startup()
        except lifecycle_utils.Lifecycle.StartupError as start_error:
            logger.error("Application has failed to start")
            raise app_errors.StartError("Application has failed to start, see logs above") from start_error

        logger.info("Application has started")

    async def dispose(self) -> None:
        logger.info("Application is shutting down...")

        try:
            await self.lifecycle.on_shutdown()
        except lifecycle_utils.Lifecycle.ShutdownError as dispose_error:
            logger.error("Application has shut down with errors")
            raise app_errors.DisposeError("Application has shut down with errors, see logs above") from dispose_error

        logger.info("Application has successfully shut down")


def _as_coroutine(function: typing.Callable[[], None]) -> lifecycle_utils.AwaitableFactory:
    async def wrapper() -> None:
        function()

    return wrapper


__all__ = [
    "Application",
]
