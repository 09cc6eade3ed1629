"""
Base Manager
Base class for stateful managers that own timers
"""

import asyncio
from typing import Any, Callable, Dict

from dc_toolbox.utils.logger import LoggerMixin


class BaseManager(LoggerMixin):
    """Base class for managers with timer management and cleanup."""

    def __init__(self, name: str):
        super().__init__(name)
        self.timers: Dict[str, asyncio.Task] = {}

    def set_managed_timer(
        self,
        name: str,
        callback: Callable[[], Any],
        delay_ms: int
    ) -> asyncio.Task:
        """
        Set a managed timer (auto-cleanup on stop).

        Args:
            name: Timer name
            callback: Async or sync callback to execute
            delay_ms: Delay in milliseconds

        Returns:
            The created task
        """
        # Clear existing timer if any
        self.clear_managed_timer(name)

        async def timer_task() -> None:
            try:
                await asyncio.sleep(delay_ms / 1000)
                self.timers.pop(name, None)
                try:
                    result = callback()
                    if asyncio.iscoroutine(result):
                        await result
                except Exception as e:
                    self.error(f"Timer {name} error: {e}")
            except asyncio.CancelledError:
                pass

        task = asyncio.create_task(timer_task())
        self.timers[name] = task
        return task

    def clear_managed_timer(self, name: str) -> None:
        """Clear a managed timer."""
        task = self.timers.pop(name, None)
        if task and not task.done():
            task.cancel()

    def clear_all_timers(self) -> None:
        """Clear all managed timers."""
        for name, task in list(self.timers.items()):
            if not task.done():
                task.cancel()
            self.debug(f"Cleared timer: {name}")
        self.timers.clear()

    def cleanup(self) -> None:
        """Clean up all resources."""
        self.clear_all_timers()
