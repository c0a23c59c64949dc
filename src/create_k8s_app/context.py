"""Application context for dependency injection.

This module separates object creation from object use. The CLI builds a
context with `create_context()`; tests construct `AppContext` directly
with test doubles for the package manager, network and initializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from create_k8s_app.config import Settings
from create_k8s_app.console import Reporter
from create_k8s_app.guard import ProjectDirectoryGuard
from create_k8s_app.protocols import FileSystem, Initializer, NameExtractor, PackageInstaller
from create_k8s_app.resolver import ReferenceResolver


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from create_k8s_app.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class AppContext:
    """Container for the collaborators of a bootstrap run."""

    settings: Settings
    reporter: Reporter
    resolver: ReferenceResolver
    extractor: NameExtractor
    installer: PackageInstaller
    initializer: Initializer
    filesystem: FileSystem = field(default_factory=_default_filesystem)
    guard: ProjectDirectoryGuard | None = None

    def __post_init__(self) -> None:
        if self.guard is None:
            self.guard = ProjectDirectoryGuard(self.settings, self.filesystem, self.reporter)


def create_context(
    settings: Settings | None = None,
    reporter: Reporter | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Args:
        settings: Override settings (for testing).
        reporter: Override console reporter (for testing).

    Returns:
        Configured AppContext with all dependencies.
    """
    from create_k8s_app.filesystem import RealFileSystem
    from create_k8s_app.initializer import NodeInitializer
    from create_k8s_app.install import Installer
    from create_k8s_app.naming import PackageNameExtractor

    settings = settings or Settings()
    reporter = reporter or Reporter()

    return AppContext(
        settings=settings,
        reporter=reporter,
        resolver=ReferenceResolver(settings.scripts_package),
        extractor=PackageNameExtractor(reporter),
        installer=Installer(settings.package_manager),
        initializer=NodeInitializer(
            node_executable=settings.node_executable,
            dependency_dir=settings.dependency_dir,
            entry_point=settings.initializer_path,
        ),
        filesystem=RealFileSystem(),
    )
