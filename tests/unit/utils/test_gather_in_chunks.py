import asyncio

import pytest

import ghdash.utils.asyncio as asyncio_utils


class QuotaError(Exception): ...


@pytest.mark.asyncio
async def test_peak_concurrency_is_bounded():
    in_flight = 0
    peak = 0

    async def handler(item: int) -> int:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return item * 2

    result = await asyncio_utils.gather_in_chunks(list(range(10)), handler, chunk_size=3)

    assert result == [item * 2 for item in range(10)]
    assert peak == 3


@pytest.mark.asyncio
async def test_failures_are_isolated():
    failures: list[tuple[int, Exception]] = []

    async def handler(item: int) -> int:
        if item == 2:
            raise ValueError("broken item")
        return item

    result = await asyncio_utils.gather_in_chunks(
        list(range(6)),
        handler,
        chunk_size=4,
        on_error=lambda item, error: failures.append((item, error)),
    )

    assert result == [0, 1, 3, 4, 5]
    assert len(failures) == 1
    assert failures[0][0] == 2
    assert isinstance(failures[0][1], ValueError)


@pytest.mark.asyncio
async def test_reraise_after_chunk_completes():
    processed: list[int] = []

    async def handler(item: int) -> int:
        if item == 0:
            raise QuotaError("quota exhausted")
        await asyncio.sleep(0)
        processed.append(item)
        return item

    with pytest.raises(QuotaError):
        await asyncio_utils.gather_in_chunks(list(range(6)), handler, chunk_size=3, reraise=(QuotaError,))

    assert processed == [1, 2]


@pytest.mark.asyncio
async def test_empty_items():
    async def handler(item: int) -> int:
        return item

    assert await asyncio_utils.gather_in_chunks([], handler, chunk_size=3) == []


@pytest.mark.asyncio
async def test_invalid_chunk_size():
    async def handler(item: int) -> int:
        return item

    with pytest.raises(ValueError):
        await asyncio_utils.gather_in_chunks([1], handler, chunk_size=0)
