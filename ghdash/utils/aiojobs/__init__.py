from .jobs import JobBase, JobProtocol, PeriodicJob
from .scheduler import Scheduler, Settings

__all__ = [
    "JobBase",
    "JobProtocol",
    "PeriodicJob",
    "Scheduler",
    "Settings",
]
