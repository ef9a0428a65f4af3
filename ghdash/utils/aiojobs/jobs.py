import abc
import asyncio
import logging
import typing


class JobProtocol(typing.Protocol):
    @property
    def name(self) -> str: ...

    async def process(self) -> None: ...


class JobBase(abc.ABC):
    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abc.abstractmethod
    async def process(self) -> None: ...


class PeriodicJob(JobBase):
    def __init__(
        self,
        interval: float,
        retry_timeout: float,
        logger: logging.Logger,
    ) -> None:
        self._interval = interval
        self._retry_timeout = retry_timeout
        self._logger = logger

        self._finished = False

    async def process(self) -> None:
        while not self._finished:
            try:
                await asyncio.sleep(self._interval)
                await self._process()
            except asyncio.CancelledError:
                self._logger.info("Job %r has been cancelled", self.name)
                return
            except Exception:
                self._logger.exception(
                    "Job %r has crashed, it will be retried after %.1f seconds",
                    self.name,
                    self._retry_timeout,
                )
                await asyncio.sleep(self._retry_timeout)

        self._logger.info("Job %r has been finished", self.name)

    def finish(self) -> None:
        self._finished = True

    @abc.abstractmethod
    async def _process(self) -> None: ...


__all__ = [
    "JobBase",
    "JobProtocol",
    "PeriodicJob",
]
