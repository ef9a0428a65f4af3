import asyncio
import logging
import typing

logger = logging.getLogger(__name__)

type ErrorHandler[ItemT] = typing.Callable[[ItemT, Exception], None]


def _log_item_error(item: typing.Any, error: Exception) -> None:
    logger.warning("Item(%r) has failed and will be skipped: %r", item, error)


async def gather_in_chunks[ItemT, ResultT](
    items: typing.Sequence[ItemT],
    handler: typing.Callable[[ItemT], typing.Awaitable[ResultT]],
    chunk_size: int,
    on_error: ErrorHandler[ItemT] | None = None,
    reraise: tuple[type[Exception], ...] = (),
) -> list[ResultT]:
    """
    Processes items chunk by chunk, each chunk of `chunk_size` items concurrently.

    A failed item is passed to `on_error` and contributes nothing to the result.
    Errors of `reraise` types are raised once their chunk has completed, so later
    chunks are not started.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    results: list[ResultT] = []
    error_handler = on_error or _log_item_error

    for start in range(0, len(items), chunk_size):
        chunk = items[start : start + chunk_size]
        outcomes = await asyncio.gather(*(handler(item) for item in chunk), return_exceptions=True)

        fatal_error: Exception | None = None
        for item, outcome in zip(chunk, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                if isinstance(outcome, reraise):
                    fatal_error = fatal_error or outcome
                    continue

                error_handler(item, outcome)
                continue

            results.append(outcome)

        if fatal_error is not None:
            raise fatal_error

    return results


__all__ = [
    "ErrorHandler",
    "gather_in_chunks",
]
