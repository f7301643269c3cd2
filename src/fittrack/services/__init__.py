"""Application services for fit-track."""

from .tracker import TrackerService

__all__ = ["TrackerService"]
