"""Resolution of the --scripts-version argument into an installable reference."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from create_k8s_app.types import (
    TARBALL_PATTERN,
    PackageReference,
    ReferenceKind,
    clean_semver,
)

logger = logging.getLogger(__name__)

Rule = Callable[[str, Path, str], PackageReference | None]


def _semver_rule(version: str, original_cwd: Path, package: str) -> PackageReference | None:
    cleaned = clean_semver(version)
    if cleaned is None:
        return None
    return PackageReference(ReferenceKind.REGISTRY_VERSIONED, f"{package}@{cleaned}")


def _tag_rule(version: str, original_cwd: Path, package: str) -> PackageReference | None:
    if not version.startswith("@") or "/" in version:
        return None
    return PackageReference(ReferenceKind.REGISTRY_TAGGED, f"{package}{version}")


def _local_path_rule(version: str, original_cwd: Path, package: str) -> PackageReference | None:
    if not version.startswith("file:"):
        return None
    relative = version[len("file:"):]
    absolute = os.path.normpath(os.path.join(original_cwd, relative))
    # file: can point at a packed archive as well as a package directory
    if TARBALL_PATTERN.match(absolute):
        return PackageReference(ReferenceKind.TARBALL_PATH, f"file:{absolute}")
    return PackageReference(ReferenceKind.LOCAL_PATH, f"file:{absolute}")


RULES: list[Rule] = [_semver_rule, _tag_rule, _local_path_rule]


class ReferenceResolver:
    """Turns a raw version/tag/path argument into a package reference."""

    def __init__(self, package_name: str) -> None:
        """Initialize resolver.

        Args:
            package_name: Name of the default scripts package on the registry.
        """
        self.package_name = package_name

    def resolve(self, raw_version: str | None, original_cwd: Path) -> PackageReference:
        """Resolve the reference to install.

        Args:
            raw_version: Value of --scripts-version, if any.
            original_cwd: Directory that relative file: paths are resolved against.

        Returns:
            The reference to hand to the package manager.
        """
        if not raw_version:
            return PackageReference(ReferenceKind.REGISTRY_DEFAULT, self.package_name)

        for rule in RULES:
            reference = rule(raw_version, original_cwd, self.package_name)
            if reference is not None:
                logger.debug("Resolved %r to %s (%s)", raw_version, reference, reference.kind.value)
                return reference

        # Tarballs, git URLs, scoped packages and forks go through untouched
        reference = PackageReference.classify(raw_version, self.package_name)
        logger.debug("Passing %r through as %s", raw_version, reference.kind.value)
        return reference
