"""Tests for package reference classification."""

from __future__ import annotations

from pathlib import Path

import pytest

from create_k8s_app.types import BootstrapArgs, PackageReference, ReferenceKind, clean_semver

DEFAULT = "k8s-scripts"


class TestCleanSemver:
    """Tests for clean_semver."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("=1.2.3", "1.2.3"),
            (" 0.8.2 ", "0.8.2"),
            ("0.2.0-alpha.1", "0.2.0-alpha.1"),
        ],
    )
    def test_valid(self, value: str, expected: str) -> None:
        """Test loose semver forms are normalized."""
        assert clean_semver(value) == expected

    @pytest.mark.parametrize("value", [None, "", "next", "@next", "1.2", "file:../x"])
    def test_invalid(self, value: str | None) -> None:
        """Test non-versions are rejected."""
        assert clean_semver(value) is None


class TestPackageReferenceClassify:
    """Tests for PackageReference.classify."""

    @pytest.mark.parametrize(
        ("spec", "kind"),
        [
            ("k8s-scripts", ReferenceKind.REGISTRY_DEFAULT),
            ("k8s-scripts@1.2.3", ReferenceKind.REGISTRY_VERSIONED),
            ("k8s-scripts@next", ReferenceKind.REGISTRY_TAGGED),
            ("@acme/k8s-scripts@next", ReferenceKind.SCOPED_TAGGED),
            ("file:/opt/k8s-scripts", ReferenceKind.LOCAL_PATH),
            ("./my-k8s-scripts-0.8.2.tgz", ReferenceKind.TARBALL_PATH),
            ("https://mysite.com/my-k8s-scripts-0.8.2.tar.gz", ReferenceKind.TARBALL_URL),
            ("git+https://github.com/org/k8s-scripts.git#v1.2.3", ReferenceKind.GIT_URL),
            ("my-k8s-scripts", ReferenceKind.RAW_PASSTHROUGH),
            ("@acme/k8s-scripts", ReferenceKind.RAW_PASSTHROUGH),
        ],
    )
    def test_kinds(self, spec: str, kind: ReferenceKind) -> None:
        """Test each shape maps to exactly one kind."""
        reference = PackageReference.classify(spec, DEFAULT)
        assert reference.kind is kind
        assert str(reference) == spec

    def test_tarball_wins_over_qualifier(self) -> None:
        """Test a tarball URL containing @ is still a tarball."""
        spec = "https://user@mysite.com/k8s-scripts-1.0.0.tgz"
        assert PackageReference.classify(spec, DEFAULT).kind is ReferenceKind.TARBALL_URL

    def test_git_wins_over_qualifier(self) -> None:
        """Test an ssh git URL with user@host is still a git URL."""
        spec = "git+ssh://git@github.com/org/k8s-scripts.git"
        assert PackageReference.classify(spec, DEFAULT).kind is ReferenceKind.GIT_URL

    def test_empty_spec_rejected(self) -> None:
        """Test empty references are invalid."""
        with pytest.raises(ValueError, match="spec cannot be empty"):
            PackageReference(ReferenceKind.RAW_PASSTHROUGH, "")


class TestBootstrapArgs:
    """Tests for BootstrapArgs."""

    def test_root_resolved_against_original_cwd(self, tmp_path: Path) -> None:
        """Test relative project directories resolve against the given cwd."""
        args = BootstrapArgs(project_directory="apps/../my-app", original_cwd=tmp_path)
        assert args.root == tmp_path / "my-app"
        assert args.app_name == "my-app"

    def test_absolute_project_directory(self, tmp_path: Path) -> None:
        """Test absolute project directories are used as given."""
        target = tmp_path / "elsewhere" / "svc"
        args = BootstrapArgs(project_directory=str(target), original_cwd=Path("/"))
        assert args.root == target
        assert args.app_name == "svc"

    def test_symlinked_project_directory_keeps_name(self, tmp_path: Path) -> None:
        """Test a symlink is not followed when naming the app."""
        real = tmp_path / "real-dir"
        real.mkdir()
        (tmp_path / "my-app").symlink_to(real, target_is_directory=True)

        args = BootstrapArgs(project_directory="my-app", original_cwd=tmp_path)

        assert args.root == tmp_path / "my-app"
        assert args.app_name == "my-app"
