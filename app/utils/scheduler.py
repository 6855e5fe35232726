import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DeferredTask:
    """
    One-shot deferred callback that can be cancelled and re-armed.

    Scheduling again cancels the previously armed callback, so on rapid
    successive calls only the last one fires. Must be scheduled from code
    running inside an asyncio event loop.

    Example:
        task = DeferredTask(name="search-debounce")
        task.schedule(apply_term, 0.3)
        task.schedule(apply_term, 0.3)  # first one never fires
    """

    def __init__(self, name: str = "deferred"):
        self.name = name
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        """True while a scheduled callback has neither fired nor been cancelled."""
        return self._handle is not None

    def schedule(self, callback: Callable[[], None], delay: float) -> asyncio.TimerHandle:
        """
        Arm the callback to run after `delay` seconds.

        Args:
            callback: Zero-argument callable to run
            delay: Delay in seconds

        Returns:
            The underlying timer handle
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, callback)
        return self._handle

    def cancel(self) -> bool:
        """Cancel the armed callback. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        logger.debug(f"Cancelled pending {self.name} callback")
        return True

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()
