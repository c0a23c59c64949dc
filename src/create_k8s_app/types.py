"""Shared data types for create-k8s-app."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

import semantic_version

__all__ = [
    "BootstrapArgs",
    "BootstrapError",
    "PackageReference",
    "ReferenceKind",
    "clean_semver",
]

TARBALL_PATTERN = re.compile(r"^.+\.(tgz|tar\.gz)$")
QUALIFIED_PATTERN = re.compile(r"^.+@")


class BootstrapError(Exception):
    """Base error for bootstrap failures."""

    pass


class ReferenceKind(str, Enum):
    """Shape of an installable package reference."""

    REGISTRY_DEFAULT = "registry-default"
    REGISTRY_VERSIONED = "registry-versioned"
    REGISTRY_TAGGED = "registry-tagged"
    SCOPED_TAGGED = "scoped-tagged"
    LOCAL_PATH = "local-path"
    TARBALL_PATH = "tarball-path"
    TARBALL_URL = "tarball-url"
    GIT_URL = "git-url"
    RAW_PASSTHROUGH = "raw-passthrough"

    @property
    def is_tarball(self) -> bool:
        return self in (ReferenceKind.TARBALL_PATH, ReferenceKind.TARBALL_URL)

    @property
    def is_qualified(self) -> bool:
        """True for references carrying an @version or @tag qualifier."""
        return self in (
            ReferenceKind.REGISTRY_VERSIONED,
            ReferenceKind.REGISTRY_TAGGED,
            ReferenceKind.SCOPED_TAGGED,
        )


def clean_semver(value: str | None) -> str | None:
    """Return the normalized semantic version, or None if value is not one.

    Accepts the loose forms npm accepts: surrounding whitespace and a
    leading ``v`` or ``=``.

    Example:
        >>> clean_semver("v1.2.3")
        '1.2.3'
        >>> clean_semver("next") is None
        True
    """
    if not value:
        return None
    candidate = value.strip().lstrip("=v").strip()
    try:
        return str(semantic_version.Version(candidate))
    except ValueError:
        return None


def _match_tarball(spec: str, default_name: str) -> ReferenceKind | None:
    if not TARBALL_PATTERN.match(spec):
        return None
    if spec.startswith("http"):
        return ReferenceKind.TARBALL_URL
    return ReferenceKind.TARBALL_PATH


def _match_git(spec: str, default_name: str) -> ReferenceKind | None:
    if spec.startswith("git+"):
        return ReferenceKind.GIT_URL
    return None


def _match_qualified(spec: str, default_name: str) -> ReferenceKind | None:
    # A leading @ is a scope marker, not a qualifier
    if not QUALIFIED_PATTERN.match(spec):
        return None
    if spec.startswith("@"):
        return ReferenceKind.SCOPED_TAGGED
    qualifier = spec.split("@", 1)[1]
    if clean_semver(qualifier):
        return ReferenceKind.REGISTRY_VERSIONED
    return ReferenceKind.REGISTRY_TAGGED


def _match_local_path(spec: str, default_name: str) -> ReferenceKind | None:
    if spec.startswith("file:"):
        return ReferenceKind.LOCAL_PATH
    return None


def _match_default(spec: str, default_name: str) -> ReferenceKind | None:
    if spec == default_name:
        return ReferenceKind.REGISTRY_DEFAULT
    return None


# Ordered: tarball and git shapes are more specific than the @ qualifier
CLASSIFIERS: list[Callable[[str, str], ReferenceKind | None]] = [
    _match_tarball,
    _match_git,
    _match_qualified,
    _match_local_path,
    _match_default,
]


@dataclass(frozen=True)
class PackageReference:
    """An installable package reference.

    Attributes:
        kind: Classified shape of the reference.
        spec: The string handed to the package manager.
    """

    kind: ReferenceKind
    spec: str

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.spec:
            raise ValueError("spec cannot be empty")

    def __str__(self) -> str:
        return self.spec

    @classmethod
    def classify(cls, spec: str, default_name: str) -> PackageReference:
        """Classify a raw reference string.

        Args:
            spec: Reference string as accepted by the package manager.
            default_name: Name of the default scripts package.

        Returns:
            PackageReference of the first matching kind, or RAW_PASSTHROUGH.
        """
        for classifier in CLASSIFIERS:
            kind = classifier(spec, default_name)
            if kind is not None:
                return cls(kind=kind, spec=spec)
        return cls(kind=ReferenceKind.RAW_PASSTHROUGH, spec=spec)


@dataclass(frozen=True)
class BootstrapArgs:
    """Parsed command-line arguments for a single bootstrap run.

    Attributes:
        project_directory: Target directory as given on the command line.
        original_cwd: Working directory at invocation time.
        verbose: Forward --verbose to the package manager.
        scripts_version: Optional override for the scripts package reference.
    """

    project_directory: str
    original_cwd: Path
    verbose: bool = False
    scripts_version: str | None = None

    @property
    def root(self) -> Path:
        """Absolute project root; symlinks are kept so app_name is what was typed."""
        return Path(os.path.abspath(os.path.join(self.original_cwd, self.project_directory)))

    @property
    def app_name(self) -> str:
        return self.root.name
