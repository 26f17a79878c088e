"""Unit tests for the mirror.scheduler module."""

import asyncio
from typing import Awaitable, Callable
from unittest.mock import MagicMock

import pytest

from gitea_mirror_manager.mirror.scheduler import run_with_concurrency_limit


class InFlightProbe:
    """Counts how many tasks run at the same time."""

    def __init__(self) -> None:
        """Initialize the counters."""
        self.current = 0
        self.maximum = 0

    def task(self, value: int) -> Callable[[], Awaitable[int]]:
        """Return a task that yields control while counted as in flight."""

        async def run() -> int:
            self.current += 1
            self.maximum = max(self.maximum, self.current)
            await asyncio.sleep(0.01)
            self.current -= 1
            return value

        return run


@pytest.mark.asyncio
async def test_at_most_limit_in_flight() -> None:
    """Test that no more than the limit of tasks run concurrently, and that the limit is used."""
    probe = InFlightProbe()

    results = await run_with_concurrency_limit([probe.task(value) for value in range(10)], limit=4)

    assert results == list(range(10))
    assert probe.maximum == 4


@pytest.mark.asyncio
async def test_limit_of_one_is_sequential() -> None:
    """Test that a limit of one runs tasks one by one."""
    probe = InFlightProbe()

    await run_with_concurrency_limit([probe.task(value) for value in range(3)], limit=1)

    assert probe.maximum == 1


@pytest.mark.asyncio
async def test_failure_is_isolated(mock_logger: MagicMock) -> None:
    """Test that a raising task yields None while its siblings complete."""

    async def fail() -> int:
        raise RuntimeError("boom")

    async def succeed() -> int:
        return 1

    results = await run_with_concurrency_limit([succeed, fail, succeed], limit=2, logger=mock_logger)

    assert results == [1, None, 1]
    mock_logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_no_tasks() -> None:
    """Test that an empty task list completes immediately."""
    assert await run_with_concurrency_limit([]) == []


@pytest.mark.asyncio
async def test_invalid_limit() -> None:
    """Test that a limit below one is rejected."""
    with pytest.raises(ValueError):
        await run_with_concurrency_limit([], limit=0)
