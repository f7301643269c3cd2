"""fit-track: personal weight, workout and nutrition tracker."""

__version__ = "0.1.0"
