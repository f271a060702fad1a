import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional


logger = logging.getLogger('use_cases')


class QuestionTimer:
    """
    Countdown for the displayed question.

    Runs as a single asyncio task on the event loop. Each tick decrements the remaining
    time and publishes it. Reaching zero calls the expiry callback exactly once.
    Starting a new countdown cancels the running one.
    """

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._remaining = 0

    def start(
        self,
        seconds: int,
        tick_callback: Callable[[int], Awaitable[Any]],
        expiry_callback: Callable[[], Awaitable[Any]]
    ) -> None:
        self.cancel()
        self._remaining = seconds
        self._task = asyncio.create_task(self._countdown(tick_callback, expiry_callback))

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        # The expiry callback cancels the timer from inside the task itself
        if task is asyncio.current_task():
            return
        task.cancel()

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def remaining(self) -> int:
        return self._remaining

    async def _countdown(self, tick_callback, expiry_callback) -> None:
        try:
            while self._remaining > 0:
                await asyncio.sleep(self.interval)
                self._remaining -= 1
                try:
                    await tick_callback(self._remaining)
                except Exception as e:
                    # A failed display update must not stop the countdown
                    logger.error(f"Question timer tick failed: {e}", exc_info=True)
            logger.debug("Question timer expired")
            await expiry_callback()
        except asyncio.CancelledError:
            logger.debug("Question timer cancelled")
            raise
        except Exception as e:
            logger.error(f"Question timer failed: {e}", exc_info=True)
