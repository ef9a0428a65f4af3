import logging

import pytest

import ghdash.utils.lifecycle as lifecycle_utils

logger = logging.getLogger(__name__)


@pytest.mark.asyncio
async def test_startup_stops_on_first_failure():
    calls: list[str] = []

    async def first() -> None:
        calls.append("first")

    async def broken() -> None:
        raise RuntimeError("broken")

    async def never() -> None:
        calls.append("never")

    lifecycle = lifecycle_utils.Lifecycle(
        logger=logger,
        startup_callbacks=[
            lifecycle_utils.Callback(factory=first, error_message="first failed", success_message="first done"),
            lifecycle_utils.Callback(factory=broken, error_message="broken failed", success_message="broken done"),
            lifecycle_utils.Callback(factory=never, error_message="never failed", success_message="never done"),
        ],
    )

    with pytest.raises(lifecycle_utils.Lifecycle.StartupError):
        await lifecycle.on_startup()

    assert calls == ["first"]


@pytest.mark.asyncio
async def test_shutdown_runs_every_callback():
    calls: list[str] = []

    async def broken() -> None:
        calls.append("broken")
        raise RuntimeError("broken")

    async def last() -> None:
        calls.append("last")

    lifecycle = lifecycle_utils.Lifecycle(
        logger=logger,
        shutdown_callbacks=[
            lifecycle_utils.Callback.from_dispose(name="broken", factory=broken),
            lifecycle_utils.Callback.from_dispose(name="last", factory=last),
        ],
    )

    with pytest.raises(lifecycle_utils.Lifecycle.ShutdownError):
        await lifecycle.on_shutdown()

    assert calls == ["broken", "last"]
