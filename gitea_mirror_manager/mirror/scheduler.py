"""Runs mirroring tasks with a bounded number in flight."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

import structlog

from gitea_mirror_manager.mirror.types import MirrorLogger

default_logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_CONCURRENCY = 4


async def run_with_concurrency_limit(
    tasks: Iterable[Callable[[], Awaitable[T]]],
    limit: int = DEFAULT_CONCURRENCY,
    logger: MirrorLogger = default_logger,
) -> list[T | None]:
    """Run every task with at most ``limit`` in flight and wait for all of them.

    Results keep the order of ``tasks``. A task that raises is logged and
    yields None; its siblings keep running.
    """
    if limit < 1:
        raise ValueError("Concurrency limit must be at least 1.")
    semaphore = asyncio.Semaphore(limit)

    async def worker(index: int, task: Callable[[], Awaitable[T]]) -> T | None:
        async with semaphore:
            try:
                return await task()
            except Exception as exc:
                logger.error("Mirroring task failed", task_index=index, error=str(exc), error_type=type(exc).__name__)
                return None

    return list(await asyncio.gather(*(worker(index, task) for index, task in enumerate(tasks))))
