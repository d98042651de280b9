"""An exception that records the stack at the point it was created."""

from __future__ import annotations

from .currentthread import stack_trace as _capture_stack


class TracedError(Exception):
    """An error carrying a message and the stack trace of its creation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self._stack = _capture_stack(False)

    def stack_trace(self) -> str:
        """The stack as it was when this error was created, innermost first."""
        return self._stack