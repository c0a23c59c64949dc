"""Recovery of the installed package name from a package reference."""

from __future__ import annotations

import asyncio
import logging
import re
import tarfile
from pathlib import Path, PurePosixPath
from typing import Callable

import aiohttp
from rich.markup import escape

from create_k8s_app.console import Reporter, cyan
from create_k8s_app.manifest import PackageManifest
from create_k8s_app.types import PackageReference, ReferenceKind
from create_k8s_app.workspace import TemporaryWorkspace

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# foo.tgz, foo-1.2.3.tgz, k8s-scripts-0.2.0-alpha.1.tar.gz
TARBALL_FILENAME = re.compile(r"^(.+?)(?:-\d+.+)?\.(?:tgz|tar\.gz)$")

# git+https://github.com/org/k8s-scripts.git
# git+ssh://github.com/org/k8s-scripts.git#v1.2.3
GIT_URL_NAME = re.compile(r"([^/#]+?)(?:\.git)?(?:#.*)?$")

# Failures that send tarball inspection down the filename fallback
ARCHIVE_ERRORS = (aiohttp.ClientError, tarfile.TarError, OSError, ValueError, EOFError)


def name_from_tarball_filename(spec: str) -> str:
    """Guess a package name from a tarball path or URL.

    Example:
        >>> name_from_tarball_filename("https://example.com/my-scripts-0.8.2.tgz")
        'my-scripts'
    """
    filename = re.split(r"[/\\]", spec)[-1]
    match = TARBALL_FILENAME.match(filename)
    if not match:
        raise ValueError(f"Cannot infer a package name from {spec!r}")
    return match.group(1)


def name_from_git_url(spec: str) -> str:
    """Take the repository name out of a git URL, ignoring any #ref."""
    match = GIT_URL_NAME.search(spec)
    if not match:
        raise ValueError(f"Cannot infer a package name from {spec!r}")
    return match.group(1)


def strip_qualifier(spec: str) -> str:
    """Drop an @version or @tag suffix, keeping a leading @scope."""
    return spec[0] + spec[1:].split("@", 1)[0]


def unpack_tarball(archive: Path, dest: Path) -> None:
    """Unpack a gzipped package tarball into dest.

    The leading directory component (``package/`` in registry tarballs) is
    stripped. Only regular files and directories are extracted.
    """
    with tarfile.open(archive, mode="r:*") as tar:
        members = []
        for member in tar.getmembers():
            if not (member.isfile() or member.isdir()):
                continue
            parts = PurePosixPath(member.name).parts
            if len(parts) < 2:
                continue
            member.name = str(PurePosixPath(*parts[1:]))
            members.append(member)
        tar.extractall(dest, members=members, filter="data")


class PackageNameExtractor:
    """Determines which name a reference will be installed under."""

    def __init__(
        self,
        reporter: Reporter,
        session_factory: Callable[[], aiohttp.ClientSession] = aiohttp.ClientSession,
    ) -> None:
        """Initialize extractor.

        Args:
            reporter: Console reporter for fallback notices.
            session_factory: Creates HTTP sessions for tarball downloads.
        """
        self.reporter = reporter
        self.session_factory = session_factory

    async def extract_name(
        self, reference: PackageReference, base_dir: Path | None = None
    ) -> str:
        """Determine the package name for reference.

        Args:
            reference: Reference about to be installed.
            base_dir: Directory relative tarball paths are resolved against.

        Returns:
            The package name.
        """
        kind = reference.kind
        if kind.is_tarball:
            return await self._from_tarball(reference, base_dir)
        if kind is ReferenceKind.GIT_URL:
            return name_from_git_url(reference.spec)
        if kind.is_qualified:
            return strip_qualifier(reference.spec)
        if kind is ReferenceKind.LOCAL_PATH:
            path = Path(reference.spec[len("file:"):])
            manifest = await asyncio.to_thread(PackageManifest.from_file, path / "package.json")
            return manifest.name
        return reference.spec

    async def _from_tarball(self, reference: PackageReference, base_dir: Path | None) -> str:
        try:
            return await self._read_tarball_name(reference, base_dir)
        except ARCHIVE_ERRORS as e:
            logger.debug("Tarball inspection failed for %s", reference, exc_info=True)
            self.reporter.show_warning(
                f"Could not extract the package name from the archive: {escape(str(e))}"
            )
            assumed = name_from_tarball_filename(reference.spec)
            self.reporter.line(f'Based on the filename, assuming it is "{cyan(assumed)}"')
            return assumed

    async def _read_tarball_name(
        self, reference: PackageReference, base_dir: Path | None
    ) -> str:
        async with await TemporaryWorkspace.acquire() as workspace:
            if reference.kind is ReferenceKind.TARBALL_URL:
                archive = workspace.path / "package.tgz"
                await self._download(reference.spec, archive)
            else:
                archive = Path(reference.spec.removeprefix("file:"))
                if base_dir is not None and not archive.is_absolute():
                    archive = base_dir / archive

            unpacked = workspace.path / "package"
            await asyncio.to_thread(unpack_tarball, archive, unpacked)
            manifest = await asyncio.to_thread(
                PackageManifest.from_file, unpacked / "package.json"
            )
            logger.debug("Read package name %r from %s", manifest.name, reference)
            return manifest.name

    async def _download(self, url: str, target: Path) -> None:
        """Stream url into target."""
        logger.debug("Downloading %s", url)
        async with self.session_factory() as session:
            async with session.get(url) as response:
                response.raise_for_status()
                with target.open("wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
