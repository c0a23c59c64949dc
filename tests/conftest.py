"""Shared test fixtures."""

from __future__ import annotations

import io
import json
import tarfile
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from create_k8s_app.config import Settings
from create_k8s_app.console import Reporter
from create_k8s_app.context import AppContext
from create_k8s_app.filesystem import RealFileSystem
from create_k8s_app.resolver import ReferenceResolver


class RecordingReporter(Reporter):
    """Reporter that keeps plain-text output for assertions."""

    def __init__(self) -> None:
        super().__init__(
            Console(
                file=io.StringIO(),
                width=200,
                color_system=None,
                highlight=False,
                soft_wrap=True,
            )
        )

    @property
    def output(self) -> str:
        return self.console.file.getvalue()


def make_tarball(
    path: Path,
    manifest: dict[str, Any] | None,
    prefix: str = "package",
    extra: dict[str, str] | None = None,
) -> Path:
    """Write a gzipped package tarball.

    Args:
        path: Where to write the archive.
        manifest: package.json content, or None to leave it out.
        prefix: Top-level directory inside the archive.
        extra: Additional files, relative to the prefix.
    """
    files = dict(extra or {})
    if manifest is not None:
        files["package.json"] = json.dumps(manifest)

    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{prefix}/{name}")
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture
def reporter() -> RecordingReporter:
    """Create a reporter that records its output."""
    return RecordingReporter()


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from a scratch working directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def mock_extractor() -> MagicMock:
    """Name extractor that always answers k8s-scripts."""
    extractor = MagicMock()
    extractor.extract_name = AsyncMock(return_value="k8s-scripts")
    return extractor


@pytest.fixture
def mock_installer() -> MagicMock:
    """Package manager that succeeds without doing anything."""
    installer = MagicMock()
    installer.install = AsyncMock(return_value=None)
    return installer


@pytest.fixture
def mock_initializer(tmp_path: Path) -> MagicMock:
    """Initializer that is always found and exits 0."""
    initializer = MagicMock()
    initializer.locate.return_value = tmp_path / "init.js"
    initializer.invoke.return_value = 0
    return initializer


@pytest.fixture
def app_context(
    settings: Settings,
    reporter: RecordingReporter,
    mock_extractor: MagicMock,
    mock_installer: MagicMock,
    mock_initializer: MagicMock,
) -> AppContext:
    """AppContext with a real filesystem and doubles for external processes."""
    return AppContext(
        settings=settings,
        reporter=reporter,
        resolver=ReferenceResolver(settings.scripts_package),
        extractor=mock_extractor,
        installer=mock_installer,
        initializer=mock_initializer,
        filesystem=RealFileSystem(),
    )


@pytest.fixture
def tarball_factory() -> Any:
    """Return a helper that writes package tarballs."""
    return make_tarball
