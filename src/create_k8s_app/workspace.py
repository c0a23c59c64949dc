"""Scratch directories for inspecting package tarballs."""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)

TEMP_PREFIX = "create-k8s-app-"


class TemporaryWorkspace:
    """A temporary directory with best-effort recursive cleanup.

    Use `acquire()` to provision one. `release()` may be called any number
    of times; errors during removal are logged and ignored since the OS
    reclaims temporary space eventually.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._released = False

    @classmethod
    async def acquire(cls, prefix: str = TEMP_PREFIX) -> TemporaryWorkspace:
        """Provision a new temporary directory.

        Args:
            prefix: Directory name prefix.

        Returns:
            TemporaryWorkspace owning the new directory.
        """
        path = await asyncio.to_thread(tempfile.mkdtemp, prefix=prefix)
        logger.debug("Acquired temporary workspace %s", path)
        return cls(Path(path))

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Remove the directory and everything in it."""
        if self._released:
            return
        self._released = True
        try:
            shutil.rmtree(self.path)
        except OSError as e:
            logger.debug("Ignoring failure to remove %s: %s", self.path, e)

    async def __aenter__(self) -> TemporaryWorkspace:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
