"""
Retry policy — attempt budget and delay schedule for remote calls.

Injected into the 4over client so tests can drive retries without waiting
on real timers (pass a no-op ``sleep``).
Version: 1.0.0
"""
import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence

from catalog_hub.core.exceptions import RemoteAPIError

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed-schedule retry policy.

    Attempt N (1-based) that fails transiently waits delays[N-1] seconds
    before the next attempt; the last delay is reused when the schedule
    is shorter than the attempt budget.
    """
    max_attempts: int = 3
    delays: Sequence[float] = (1.0, 2.0)
    sleep: SleepFn = field(default=asyncio.sleep, compare=False, repr=False)

    def delay_for(self, attempt: int) -> float:
        if not self.delays:
            return 0.0
        index = min(attempt - 1, len(self.delays) - 1)
        return float(self.delays[index])

    def should_retry(self, error: RemoteAPIError, attempt: int) -> bool:
        return error.is_transient and attempt < self.max_attempts

    async def wait(self, attempt: int) -> None:
        delay = self.delay_for(attempt)
        if delay > 0:
            await self.sleep(delay)


NO_RETRY = RetryPolicy(max_attempts=1, delays=())
