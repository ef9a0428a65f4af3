import asyncio
import dataclasses
import logging
import typing

import aiojobs

import ghdash.utils.aiojobs.jobs as utils_aiojobs_jobs

logger = logging.getLogger(__name__)

AioJobsScheduler = aiojobs.Scheduler


@dataclasses.dataclass
class Settings:
    limit: int | None = None
    pending_limit: int | None = None
    close_timeout: float | None = 10


class Scheduler:
    class DisposeError(Exception): ...

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._aiojobs_scheduler: AioJobsScheduler | None = None
        self._deferred_jobs: list[utils_aiojobs_jobs.JobProtocol] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> typing.Self:
        return cls(settings=settings)

    def _get_aiojobs_scheduler(self) -> AioJobsScheduler:
        # aiojobs.Scheduler binds to the running loop on creation
        if self._aiojobs_scheduler is None:
            self._aiojobs_scheduler = AioJobsScheduler(
                exception_handler=None,
                limit=self._settings.limit,
                pending_limit=self._settings.pending_limit or 0,
                close_timeout=self._settings.close_timeout,
            )
        return self._aiojobs_scheduler

    def defer_jobs(self, *jobs: utils_aiojobs_jobs.JobProtocol) -> None:
        self._deferred_jobs.extend(jobs)

    async def spawn_deferred_jobs(self) -> None:
        logger.info("Deferred jobs are starting")

        while self._deferred_jobs:
            job = self._deferred_jobs.pop()
            await self.spawn_job(job)

        logger.info("Deferred jobs were successfully started")

    async def spawn_job(self, job: utils_aiojobs_jobs.JobProtocol) -> None:
        logger.info("Spawning job %r", job.name)
        await self._get_aiojobs_scheduler().spawn(job.process())

    async def dispose(self) -> None:
        if self._aiojobs_scheduler is None:
            return

        try:
            await self._aiojobs_scheduler.close()
        except asyncio.CancelledError:
            # See: https://github.com/aio-libs/aiojobs/issues/252
            pass
        except Exception as unexpected_error:
            raise self.DisposeError from unexpected_error

    @property
    def is_empty(self) -> bool:
        return self._aiojobs_scheduler is None or len(self._aiojobs_scheduler) == 0


__all__ = [
    "Scheduler",
    "Settings",
]
