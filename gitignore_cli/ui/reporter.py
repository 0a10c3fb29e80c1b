"""Per-item console reporting for a fetch run."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from rich.console import Console

SUCCESS_MARK = "✔"
FAILURE_MARK = "✖"


class Reporter(Protocol):
    def success(self, name: str) -> None: ...

    def missing(self, key: str) -> None: ...

    def failed(self, name: str) -> None: ...


class NullReporter:
    """Reporter that discards every event."""

    def success(self, name: str) -> None:
        return

    def missing(self, key: str) -> None:
        return

    def failed(self, name: str) -> None:
        return


class ConsoleReporter:
    """Print outcomes as they happen. Safe to call from worker threads."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def _line(self, text: str, style: str | None = None) -> None:
        self.console.print(text, style=style, markup=False, highlight=False)

    def start(self, repository: str) -> None:
        self._line(f"> Downloading choices from @{repository}")

    def success(self, name: str) -> None:
        self._line(f"  {SUCCESS_MARK} {name}", style="green")

    def missing(self, key: str) -> None:
        self._line(f"  {FAILURE_MARK} {key}", style="red")

    def failed(self, name: str) -> None:
        self._line(f"  {FAILURE_MARK} {name} (download failed)", style="red")

    def finished(self, success_count: int, path: Path) -> None:
        self._line(f"> Added {success_count} entries to {path.name}")

    def error(self, message: str) -> None:
        self._line(f"> {message}", style="bold red")


__all__ = ["ConsoleReporter", "FAILURE_MARK", "NullReporter", "Reporter", "SUCCESS_MARK"]
