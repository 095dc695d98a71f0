"""Runtime services that drive a board outside of its own calls."""

from .scheduler import ScheduledTask, SchedulerService

__all__ = ["ScheduledTask", "SchedulerService"]
