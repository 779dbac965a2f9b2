"""
Request pacer — fixed gap between consecutive remote calls.

4over enforces a shared rate limit, so a sync run never issues two calls
back to back. The first call goes out immediately; every later call waits
``interval`` seconds. Each sync run owns its own pacer.
Version: 1.0.0
"""
import asyncio
import logging

from catalog_hub.utils.retry import SleepFn

logger = logging.getLogger("pacer")


class RequestPacer:
    def __init__(self, interval: float, sleep: SleepFn = asyncio.sleep) -> None:
        self._interval = interval
        self._sleep = sleep
        self._calls = 0

    @property
    def calls(self) -> int:
        return self._calls

    async def wait(self) -> None:
        """Block until the next remote call may be issued."""
        if self._calls > 0 and self._interval > 0:
            logger.debug("pacer waiting %.2fs before call %s", self._interval, self._calls + 1)
            await self._sleep(self._interval)
        self._calls += 1
