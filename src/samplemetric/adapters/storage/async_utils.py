"""Helpers for driving async sinks from synchronous code."""

import asyncio
from collections.abc import AsyncIterable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def _run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion in a new event loop.

    Must not be called from inside a running event loop.
    """
    return asyncio.run(coro)


async def _gather(iterable: AsyncIterable[T]) -> list[T]:
    return [item async for item in iterable]


def _collect_async_iterable(iterable: AsyncIterable[T]) -> list[T]:
    """Collect an async iterable into a list from synchronous code."""
    return _run_sync(_gather(iterable))
