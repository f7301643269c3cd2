"""CLI commands for fit-track."""

from .export import export
from .goals import goals
from .history import history
from .init import init
from .log import log
from .serve import serve
from .stats import stats
from .summary import summary

__all__ = [
    "export",
    "goals",
    "history",
    "init",
    "log",
    "serve",
    "stats",
    "summary",
]
