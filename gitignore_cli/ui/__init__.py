"""User interaction helpers."""

from .reporter import ConsoleReporter, NullReporter, Reporter

__all__ = ["ConsoleReporter", "NullReporter", "Reporter"]
