from .app import Application
from .errors import ApplicationError, DisposeError, StartError
from .settings import Settings
from .tunables import DEFAULT_TUNABLES_KEY, Tunables, TunablesService

__all__ = [
    "Application",
    "ApplicationError",
    "DEFAULT_TUNABLES_KEY",
    "DisposeError",
    "Settings",
    "StartError",
    "Tunables",
    "TunablesService",
]
