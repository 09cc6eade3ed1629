"""
Error Handler
Process-level error handling and graceful shutdown
"""

import asyncio
import signal
import traceback
from typing import Any, Awaitable, Callable, Dict, Optional

from dc_toolbox.utils.logger import BotLogger, log_scoped

ShutdownCallback = Callable[[str], Awaitable[Any]]


class ErrorHandler:
    """Logs errors nothing else caught and shuts the bot down on SIGINT/SIGTERM."""

    def __init__(self, logger: Optional[BotLogger] = None):
        self.logger = logger
        self.on_shutdown: Optional[ShutdownCallback] = None
        self._shutdown_task: Optional[asyncio.Task] = None

    def initialize(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        on_shutdown: Optional[ShutdownCallback] = None,
    ) -> None:
        """
        Install the loop exception handler and signal handlers.

        Args:
            loop: Event loop to attach to (default: the running loop)
            on_shutdown: Coroutine function called with the signal name
        """
        if loop is None:
            loop = asyncio.get_running_loop()

        self.on_shutdown = on_shutdown
        loop.set_exception_handler(self._async_exception_handler)

        try:
            loop.add_signal_handler(signal.SIGINT, self._signal_handler, signal.SIGINT)
            loop.add_signal_handler(signal.SIGTERM, self._signal_handler, signal.SIGTERM)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

        log_scoped(self.logger, "Error handlers set up.", "info", "startup")

    def _signal_handler(self, sig: signal.Signals) -> None:
        """Handle shutdown signals."""
        if self._shutdown_task and not self._shutdown_task.done():
            return
        self._shutdown_task = asyncio.get_running_loop().create_task(self.shutdown(sig.name))

    def _async_exception_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        """Handle exceptions from tasks and callbacks nobody awaited."""
        exception = context.get("exception")
        if exception:
            self.handle_exception(exception, "unhandled")
        else:
            message = context.get("message", "Unknown async error")
            log_scoped(self.logger, f"Unhandled error: {message}", "warn", "errorhandler")

    def handle_exception(self, error: BaseException, context: str = "") -> None:
        """
        Log an exception with its traceback.

        Args:
            error: The exception that occurred
            context: Optional context string
        """
        prefix = f"[{context}] " if context else ""
        log_scoped(self.logger, f"{prefix}{type(error).__name__}: {error}", "error", "errorhandler", True)

        details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        log_scoped(self.logger, f"Traceback:\n{details}", "debug", "errorhandler")

    async def shutdown(self, reason: str) -> None:
        """Run the shutdown callback once."""
        log_scoped(self.logger, f"{reason} received. Cleaning up...", "info", "shutdown")

        if self.on_shutdown is None:
            return

        try:
            await self.on_shutdown(reason)
        except Exception as e:
            log_scoped(self.logger, f"Shutdown failed: {e}", "error", "shutdown", True)
