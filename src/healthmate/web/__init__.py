"""JSON API for healthmate."""

from .app import create_app

__all__ = ["create_app"]
