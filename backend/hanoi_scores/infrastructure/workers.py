"""Worker Pool: bounded thread offload for blocking calls.

Invariants:
    - At most `size` calls run at once; the rest wait without blocking the event loop
    - The event loop never executes a database call itself

Design Decisions:
    - anyio.to_thread with a dedicated CapacityLimiter instead of the shared default
    - Limiter created lazily on first use, inside the running event loop
"""

from typing import Callable, TypeVar

import anyio
import anyio.to_thread
from fastapi import Request

T = TypeVar("T")


class WorkerPool:
    """Runs blocking callables in worker threads, bounded by a capacity limiter."""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"worker pool size must be >= 1, got {size}")
        self.size = size
        self._limiter: anyio.CapacityLimiter | None = None

    @property
    def limiter(self) -> anyio.CapacityLimiter:
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(self.size)
        return self._limiter

    @property
    def busy(self) -> int:
        """Number of worker slots currently held."""
        if self._limiter is None:
            return 0
        return int(self._limiter.borrowed_tokens)

    async def run(self, func: Callable[..., T], *args) -> T:
        """Run func(*args) in a worker thread and await its result."""
        return await anyio.to_thread.run_sync(func, *args, limiter=self.limiter)


async def get_workers(request: Request) -> WorkerPool:
    """FastAPI dependency for the process-wide worker pool."""
    workers = getattr(request.app.state, "workers", None)
    if workers is None:
        raise RuntimeError("Worker pool not initialized")
    return workers
