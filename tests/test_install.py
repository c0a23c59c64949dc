"""Tests for the package manager installer."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_k8s_app.install import InstallFailure, Installer
from create_k8s_app.types import PackageReference, ReferenceKind


class FakeSpawner:
    """Records subprocess launches and exits with a fixed code."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.returncode = 0

    async def __call__(self, *command: str, **kwargs: Any) -> MagicMock:
        self.calls.append({"command": list(command), "kwargs": kwargs})
        process = MagicMock()
        process.wait = AsyncMock(return_value=self.returncode)
        return process


@pytest.fixture
def spawner(monkeypatch: pytest.MonkeyPatch) -> FakeSpawner:
    """Replace subprocess creation with a FakeSpawner."""
    fake = FakeSpawner()
    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake)
    monkeypatch.setattr("create_k8s_app.install.shutil.which", lambda name: None)
    return fake


def _refs(*specs: str) -> list[PackageReference]:
    return [PackageReference.classify(spec, "k8s-scripts") for spec in specs]


class TestInstaller:
    """Tests for Installer."""

    def test_build_args(self) -> None:
        """Test the fixed flag set precedes the references."""
        installer = Installer()
        args = installer.build_args(_refs("k8s-scripts@1.0.0"), verbose=False)
        assert args == [
            "install",
            "--save",
            "--save-exact",
            "--loglevel",
            "error",
            "k8s-scripts@1.0.0",
        ]

    def test_build_args_verbose(self) -> None:
        """Test --verbose is added before the references."""
        installer = Installer()
        args = installer.build_args(_refs("a", "b"), verbose=True)
        assert args[-3:] == ["--verbose", "a", "b"]

    @pytest.mark.asyncio
    async def test_install_success(
        self, spawner: FakeSpawner, tmp_path: Path
    ) -> None:
        """Test a zero exit resolves and runs in the project root."""
        installer = Installer("npm")

        await installer.install(tmp_path, _refs("k8s-scripts"), verbose=False)

        assert len(spawner.calls) == 1
        assert spawner.calls[0]["command"] == [
            "npm",
            "install",
            "--save",
            "--save-exact",
            "--loglevel",
            "error",
            "k8s-scripts",
        ]
        assert spawner.calls[0]["kwargs"]["cwd"] == tmp_path

    @pytest.mark.asyncio
    async def test_install_failure_carries_command(
        self, spawner: FakeSpawner, tmp_path: Path
    ) -> None:
        """Test a nonzero exit raises InstallFailure with the exact command line."""
        spawner.returncode = 1
        installer = Installer("npm")
        references = _refs("k8s-scripts@1.0.0", "@acme/extra@next")

        with pytest.raises(InstallFailure) as exc_info:
            await installer.install(tmp_path, references, verbose=True)

        assert exc_info.value.command == (
            "npm install --save --save-exact --loglevel error --verbose "
            "k8s-scripts@1.0.0 @acme/extra@next"
        )
        assert exc_info.value.returncode == 1

    @pytest.mark.asyncio
    async def test_install_uses_resolved_executable(
        self, spawner: FakeSpawner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the executable found on PATH is spawned, but the command names the manager."""
        monkeypatch.setattr(
            "create_k8s_app.install.shutil.which", lambda name: f"/usr/local/bin/{name}"
        )
        spawner.returncode = 2
        installer = Installer("npm")

        with pytest.raises(InstallFailure) as exc_info:
            await installer.install(tmp_path, _refs("k8s-scripts"), verbose=False)

        assert spawner.calls[0]["command"][0] == "/usr/local/bin/npm"
        assert exc_info.value.command.startswith("npm install ")

    @pytest.mark.asyncio
    async def test_missing_executable_propagates(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a package manager that cannot be started is not an InstallFailure."""

        async def fail(*command: str, **kwargs: Any) -> None:
            raise FileNotFoundError(command[0])

        monkeypatch.setattr(asyncio, "create_subprocess_exec", fail)
        installer = Installer("definitely-not-npm")

        with pytest.raises(FileNotFoundError):
            await installer.install(tmp_path, _refs("k8s-scripts"), verbose=False)

    def test_install_failure_message(self) -> None:
        """Test the failure reads like the original command."""
        error = InstallFailure("npm install --save k8s-scripts", 1)
        assert str(error) == "npm install --save k8s-scripts has failed"
        assert isinstance(error, Exception)

    def test_reference_kinds_are_stringified(self) -> None:
        """Test references are passed as their spec strings."""
        reference = PackageReference(ReferenceKind.LOCAL_PATH, "file:/opt/scripts")
        assert Installer().build_args([reference], verbose=False)[-1] == "file:/opt/scripts"
