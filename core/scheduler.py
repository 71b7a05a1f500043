"""
Tick Scheduling
Periodic clock provided by the host to drive timer ticks
"""
import asyncio
from typing import Callable, Optional, Protocol


class Subscription(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """
    Host clock interface
    schedule_every must call callback every interval seconds until the
    returned subscription is cancelled
    """

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> Subscription:
        ...


class AsyncioSubscription:
    """Repeating call_later chain on an asyncio loop"""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self.cancelled = False
        self._schedule()

    def _schedule(self):
        self._handle = self._loop.call_later(self._interval, self._fire)

    def _fire(self):
        if self.cancelled:
            return
        try:
            self._callback()
        except Exception as e:
            print(f"Error in scheduled tick: {e}")
        # callback may have cancelled us
        if not self.cancelled:
            self._schedule()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop

    All callbacks run on the loop thread, which serializes ticks for a key
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> AsyncioSubscription:
        return AsyncioSubscription(self.loop, interval, callback)
