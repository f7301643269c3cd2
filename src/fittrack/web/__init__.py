"""Web API for fit-track."""

from .app import create_app

__all__ = ["create_app"]
