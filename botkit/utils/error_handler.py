"""
Error Handler
Central reporting for failures that must not take the bot down
"""

import asyncio
import functools
import traceback
from typing import Any, Callable, Dict, Optional

from botkit.utils.logger import get_logger


class ErrorHandler:
    """Global error handler for the bot."""

    def __init__(self):
        self.logger = get_logger("ErrorHandler")
        self.error_counts: Dict[str, int] = {}

    def initialize(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Install the asyncio exception handler on the given (or running) loop."""
        if loop is None:
            loop = asyncio.get_running_loop()

        loop.set_exception_handler(self._async_exception_handler)
        self.logger.info("Error handlers initialized")

    def _async_exception_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        """Handle async exceptions."""
        exception = context.get("exception")
        if exception:
            self.handle_exception(exception, "async")
        else:
            message = context.get("message", "Unknown async error")
            self.logger.error(f"Async error: {message}")

    def handle_exception(self, error: BaseException, context: str = "") -> int:
        """
        Handle an exception.

        Args:
            error: The exception that occurred
            context: Optional context string

        Returns:
            Number of errors seen so far for this context and error type
        """
        error_key = f"{context}:{type(error).__name__}"

        if context:
            self.logger.error(f"[{context}] {error}")
        else:
            self.logger.error(f"{error}")

        # Log traceback for debugging
        trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        self.logger.debug(f"Traceback:\n{trace}")

        count = self.error_counts.get(error_key, 0) + 1
        self.error_counts[error_key] = count
        return count

    def wrap(self, context: str):
        """Decorator to report exceptions from an async function before re-raising them."""
        def decorator(func: Callable) -> Callable:
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    self.handle_exception(e, context)
                    raise
            return wrapper
        return decorator

    def reset(self) -> None:
        """Clear collected error counts."""
        self.error_counts.clear()

    async def shutdown(self) -> None:
        """Clean shutdown."""
        self.logger.info("Shutting down error handler...")
        self.reset()


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def setup_error_handler(loop: Optional[asyncio.AbstractEventLoop] = None) -> ErrorHandler:
    """Set up the global error handler."""
    handler = get_error_handler()
    handler.initialize(loop)
    return handler
