"""Persist merged template content to a .gitignore file."""

from __future__ import annotations

from pathlib import Path

from ..errors import PersistenceError


class GitignoreWriter:
    """Append to (or overwrite) the target file, creating it when absent."""

    def __init__(self, path: Path, overwrite: bool = False) -> None:
        self.path = path
        self.overwrite = overwrite

    def write(self, content: str) -> Path:
        mode = "w" if self.overwrite else "a"
        try:
            with self.path.open(
                mode, encoding="utf-8", errors="surrogateescape", newline=""
            ) as stream:
                stream.write(content)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc
        return self.path


__all__ = ["GitignoreWriter"]
