"""
Join-all task group.

Unlike ``asyncio.TaskGroup``, a failing task never cancels its siblings: every
exception is captured into that task's Outcome and ``join`` always waits for
all tasks to settle.

Example:
    group = SettledTaskGroup()
    for model in models:
        group.spawn(client.complete(messages, model, ...))
    outcomes = await group.join()  # same order as spawn()
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Settled result of one task: either a value or the exception it raised."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _settle(awaitable: Awaitable[T]) -> Outcome[T]:
    try:
        return Outcome(value=await awaitable)
    except Exception as e:
        return Outcome(error=e)


class SettledTaskGroup(Generic[T]):
    """Runs awaitables concurrently and collects every outcome in spawn order."""

    def __init__(self):
        self._tasks: List["asyncio.Task[Outcome[T]]"] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, awaitable: Awaitable[T]) -> int:
        """Start a task immediately and return its index in the join result."""
        self._tasks.append(asyncio.ensure_future(_settle(awaitable)))
        return len(self._tasks) - 1

    async def join(self) -> List[Outcome[T]]:
        """Wait for every spawned task to finish."""
        if not self._tasks:
            return []
        return list(await asyncio.gather(*self._tasks))

    async def __aenter__(self) -> "SettledTaskGroup[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.join()
