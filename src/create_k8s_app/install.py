"""Installation of the scripts package through the external package manager."""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

from create_k8s_app.types import BootstrapError, PackageReference

logger = logging.getLogger(__name__)

INSTALL_ARGS = ["install", "--save", "--save-exact", "--loglevel", "error"]


class InstallFailure(BootstrapError):
    """The package manager exited with a nonzero status.

    Attributes:
        command: The full command line that failed.
        returncode: Exit status of the package manager.
    """

    def __init__(self, command: str, returncode: int | None = None) -> None:
        super().__init__(f"{command} has failed")
        self.command = command
        self.returncode = returncode


class Installer:
    """Runs ``<pm> install`` in the project root with inherited terminal I/O."""

    def __init__(self, package_manager: str = "npm") -> None:
        """Initialize installer.

        Args:
            package_manager: Package manager executable name.
        """
        self.package_manager = package_manager

    def build_args(self, references: Sequence[PackageReference], verbose: bool) -> list[str]:
        """Build the argument list for an install.

        Args:
            references: References to install, in order.
            verbose: Add --verbose.

        Returns:
            Arguments following the executable name.
        """
        args = list(INSTALL_ARGS)
        if verbose:
            args.append("--verbose")
        args.extend(str(reference) for reference in references)
        return args

    def _executable(self) -> str:
        # Resolves npm.cmd and friends on Windows
        return shutil.which(self.package_manager) or self.package_manager

    async def install(
        self, root: Path, references: Sequence[PackageReference], verbose: bool
    ) -> None:
        """Install references into the project at root.

        Args:
            root: Project root containing the manifest.
            references: References to install, in order.
            verbose: Ask the package manager for extra logging.

        Raises:
            InstallFailure: If the package manager exits nonzero.
            OSError: If the package manager cannot be started.
        """
        args = self.build_args(references, verbose)
        command = " ".join([self.package_manager, *args])
        logger.debug("Running %s in %s", command, root)

        process = await asyncio.create_subprocess_exec(self._executable(), *args, cwd=root)
        returncode = await process.wait()
        if returncode != 0:
            logger.debug("%s exited with %s", command, returncode)
            raise InstallFailure(command, returncode)
