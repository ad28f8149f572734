"""CLI commands for healthmate."""

from .ai import ai
from .analytics import analytics
from .clear import clear
from .init import init
from .log import log
from .profile import profile
from .serve import serve

__all__ = [
    "ai",
    "analytics",
    "clear",
    "init",
    "log",
    "profile",
    "serve",
]
