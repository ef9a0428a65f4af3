import dataclasses
import logging
import typing

type AwaitableFactory = typing.Callable[[], typing.Awaitable[typing.Any]]


@dataclasses.dataclass(frozen=True)
class Callback:
    factory: AwaitableFactory
    error_message: str
    success_message: str

    @classmethod
    def from_dispose(cls, name: str, factory: AwaitableFactory) -> typing.Self:
        return cls(
            factory=factory,
            error_message=f"Failed to dispose {name}",
            success_message=f"{name} has been disposed successfully",
        )


@dataclasses.dataclass(frozen=True)
class Lifecycle:
    class StartupError(Exception): ...

    class ShutdownError(Exception): ...

    logger: logging.Logger
    startup_callbacks: list[Callback] = dataclasses.field(default_factory=list)
    shutdown_callbacks: list[Callback] = dataclasses.field(default_factory=list)

    async def on_startup(self) -> None:
        for callback in self.startup_callbacks:
            try:
                await callback.factory()
            except Exception as e:
                self.logger.exception(callback.error_message)
                raise self.StartupError(callback.error_message) from e

            self.logger.info(callback.success_message)

    async def on_shutdown(self) -> None:
        failed = False
        # every callback runs even if a previous one has failed
        for callback in self.shutdown_callbacks:
            try:
                await callback.factory()
            except Exception:
                self.logger.exception(callback.error_message)
                failed = True
                continue

            self.logger.info(callback.success_message)

        if failed:
            raise self.ShutdownError("Some shutdown callbacks have failed")


__all__ = [
    "AwaitableFactory",
    "Callback",
    "Lifecycle",
]
