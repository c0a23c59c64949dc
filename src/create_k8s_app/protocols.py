"""Protocol definitions for the bootstrap collaborators.

The orchestrator depends on these interfaces rather than concrete classes,
so tests can substitute doubles for the package manager, the network and
the initializer without patching module imports.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from create_k8s_app.types import PackageReference


@runtime_checkable
class PackageInstaller(Protocol):
    """Protocol for the external package manager."""

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
        """
        ...


@runtime_checkable
class NameExtractor(Protocol):
    """Protocol for recovering a package name from a reference."""

    async def extract_name(
        self, reference: PackageReference, base_dir: Path | None = None
    ) -> str:
        """Determine the name the package will be installed under.

        Args:
            reference: Reference about to be installed.
            base_dir: Directory relative tarball paths are resolved against.

        Returns:
            The package name.
        """
        ...


@runtime_checkable
class Initializer(Protocol):
    """Protocol for the initializer shipped inside the scripts package.

    Discovery rule: ``<root>/<dependency-dir>/<package>/scripts/init.js``.
    """

    def locate(self, root: Path, package_name: str) -> Path:
        """Find the initializer entry point.

        Args:
            root: Project root.
            package_name: Installed scripts package name.

        Returns:
            Path to the entry point.

        Raises:
            InitializerNotFoundError: If the entry point does not exist.
        """
        ...

    def invoke(
        self, entry_point: Path, root: Path, app_name: str, verbose: bool, original_cwd: Path
    ) -> int:
        """Run the initializer and return its exit code."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    """

    def read_text(self, path: Path) -> str:
        """Read text content from a file.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...

    def listdir(self, path: Path) -> list[str]:
        """List entry names in a directory."""
        ...

    def remove(self, path: Path) -> None:
        """Remove a file or a whole directory tree."""
        ...
