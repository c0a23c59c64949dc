"""Hand-off to the initializer shipped inside the scripts package.

The initializer is a Node module exporting a single function::

    module.exports = function (root, appName, verbose, originalDirectory) { ... }

It lives at a fixed path inside the installed package and is run in a
separate ``node`` process. Everything it does is its own business.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from create_k8s_app.types import BootstrapError

logger = logging.getLogger(__name__)

# argv[0] is the node binary when running with -e
BOOTSTRAP_SNIPPET = (
    "const [entry, root, appName, verbose, cwd] = process.argv.slice(1);"
    "require(entry)(root, appName, verbose === 'true', cwd);"
)


class InitializerNotFoundError(BootstrapError):
    """The installed package does not ship the expected initializer."""

    def __init__(self, package_name: str, path: Path) -> None:
        super().__init__(f"Package '{package_name}' has no initializer at {path}")
        self.package_name = package_name
        self.path = path


class NodeInitializer:
    """Locates and runs ``scripts/init.js`` from the installed package."""

    def __init__(
        self,
        node_executable: str = "node",
        dependency_dir: str = "node_modules",
        entry_point: tuple[str, ...] = ("scripts", "init.js"),
    ) -> None:
        self.node_executable = node_executable
        self.dependency_dir = dependency_dir
        self.entry_point = entry_point

    def locate(self, root: Path, package_name: str) -> Path:
        """Find the initializer entry point.

        Args:
            root: Project root.
            package_name: Installed scripts package name (may be scoped).

        Returns:
            Path to the entry point.

        Raises:
            InitializerNotFoundError: If the entry point does not exist.
        """
        path = root.joinpath(self.dependency_dir, *package_name.split("/"), *self.entry_point)
        if not path.is_file():
            raise InitializerNotFoundError(package_name, path)
        return path

    def build_command(
        self, entry_point: Path, root: Path, app_name: str, verbose: bool, original_cwd: Path
    ) -> list[str]:
        return [
            self.node_executable,
            "-e",
            BOOTSTRAP_SNIPPET,
            str(entry_point),
            str(root),
            app_name,
            "true" if verbose else "false",
            str(original_cwd),
        ]

    def invoke(
        self, entry_point: Path, root: Path, app_name: str, verbose: bool, original_cwd: Path
    ) -> int:
        """Run the initializer synchronously with inherited terminal I/O.

        Returns:
            The initializer's exit code.
        """
        command = self.build_command(entry_point, root, app_name, verbose, original_cwd)
        logger.debug("Running initializer %s", entry_point)
        completed = subprocess.run(command, cwd=root, check=False)
        return completed.returncode
