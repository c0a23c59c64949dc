"""Filesystem abstraction for testability.

This module provides a filesystem abstraction that enables testing
the guard and rollback logic without real I/O operations. The
RealFileSystem implementation wraps standard library operations.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def read_text(self, path: Path) -> str:
        """Read text content from a file."""
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        # newline="" keeps os.linesep endings as written
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def listdir(self, path: Path) -> list[str]:
        """List entry names in a directory, sorted."""
        return sorted(entry.name for entry in path.iterdir())

    def remove(self, path: Path) -> None:
        """Remove a file, symlink, or directory tree."""
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
