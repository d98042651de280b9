"""Threading primitives, time handling, process facts and logging for server programs."""

__version__ = "1.0.0"