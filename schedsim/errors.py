from __future__ import annotations

from typing import Optional


class SchedulingError(ValueError):
    """
    Base class for every error the simulation engine reports to its caller.
    """

    def __init__(self, message: str, field: Optional[str] = None, pid: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.pid = pid


class InvalidInput(SchedulingError):
    """The process list is empty, too large, or a process breaks a field constraint."""


class InvalidParameter(SchedulingError):
    """Unknown algorithm or an unusable round-robin quantum."""
