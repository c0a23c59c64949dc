"""Pre-flight checks on the target project directory."""

from __future__ import annotations

import logging
from pathlib import Path

from create_k8s_app.config import Settings
from create_k8s_app.console import Reporter, green
from create_k8s_app.protocols import FileSystem

logger = logging.getLogger(__name__)


class ProjectDirectoryGuard:
    """Refuses to bootstrap into a directory holding unrelated files.

    Only entries on the allow-list (VCS metadata, OS litter, docs, license,
    ignore files) may exist. Error logs left by a previous failed install
    are not conflicts; they are deleted instead.
    """

    def __init__(self, settings: Settings, filesystem: FileSystem, reporter: Reporter) -> None:
        self.valid_files = frozenset(settings.valid_files)
        self.error_log_prefixes = tuple(settings.error_log_prefixes)
        self.fs = filesystem
        self.reporter = reporter

    def is_error_log(self, entry: str) -> bool:
        return entry.startswith(self.error_log_prefixes)

    def find_conflicts(self, root: Path) -> list[str]:
        """List entries in root that could conflict with a new project.

        Directories are reported with a trailing slash.

        Args:
            root: Directory to inspect.

        Returns:
            Conflicting entry names, sorted.
        """
        conflicts = []
        for entry in self.fs.listdir(root):
            if entry in self.valid_files or self.is_error_log(entry):
                continue
            if self.fs.is_dir(root / entry):
                entry = f"{entry}/"
            conflicts.append(entry)
        return conflicts

    def remove_error_logs(self, root: Path) -> list[str]:
        """Delete error logs left over from a previous run.

        Returns:
            Names of removed entries.
        """
        removed = []
        for entry in self.fs.listdir(root):
            if self.is_error_log(entry):
                logger.debug("Removing leftover error log %s", entry)
                self.fs.remove(root / entry)
                removed.append(entry)
        return removed

    def ensure_clean(self, root: Path, name: str) -> bool:
        """Check that root is safe to create a project in.

        Reports each conflicting entry when the check fails. Nothing is
        removed unless the check passes.

        Args:
            root: Absolute project root.
            name: Directory name as given by the user.

        Returns:
            True if the project can be created, False otherwise.
        """
        conflicts = self.find_conflicts(root)
        if conflicts:
            self.reporter.line(f"The directory {green(name)} contains files that could conflict:")
            self.reporter.line()
            for conflict in conflicts:
                self.reporter.line(f"  {conflict}")
            self.reporter.line()
            self.reporter.line(
                "Either try using a new directory name, or remove the files listed above."
            )
            return False

        self.remove_error_logs(root)
        return True
