"""Sequencing of a single bootstrap run, with rollback on failure."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

from rich.markup import escape

from create_k8s_app.console import cyan, green
from create_k8s_app.context import AppContext
from create_k8s_app.initializer import InitializerNotFoundError
from create_k8s_app.install import InstallFailure
from create_k8s_app.manifest import ProjectManifest
from create_k8s_app.types import BootstrapArgs

logger = logging.getLogger(__name__)


class BootstrapStage(str, Enum):
    """Progress of a bootstrap run."""

    INIT = "init"
    GUARD_CHECKED = "guard-checked"
    MANIFEST_WRITTEN = "manifest-written"
    RESOLVED = "resolved"
    NAME_EXTRACTED = "name-extracted"
    INSTALLED = "installed"
    INITIALIZER_INVOKED = "initializer-invoked"
    ROLLING_BACK = "rolling-back"
    ABORTED = "aborted"


class Bootstrapper:
    """Creates a project directory and hands it to the scripts package.

    Guard, manifest, resolve, name, install and initializer run strictly
    in that order. A failure between the manifest write and the initializer
    hand-off rolls the project directory back to its previous state.
    """

    def __init__(self, ctx: AppContext) -> None:
        self.ctx = ctx
        self.stage = BootstrapStage.INIT

    def _advance(self, stage: BootstrapStage) -> None:
        logger.debug("Bootstrap stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    async def run(self, args: BootstrapArgs) -> int:
        """Bootstrap the project described by args.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Process exit code: 1 on conflict or failure, otherwise the
            initializer's own exit code.
        """
        ctx = self.ctx
        root = args.root
        app_name = args.app_name

        ctx.filesystem.mkdir(root, parents=True, exist_ok=True)
        if not ctx.guard.ensure_clean(root, args.project_directory):
            return 1
        self._advance(BootstrapStage.GUARD_CHECKED)

        ctx.reporter.line(f"Creating a new Kubernetes app in {green(root)}.")
        ctx.reporter.line()

        try:
            self.write_manifest(root, app_name)
            self._advance(BootstrapStage.MANIFEST_WRITTEN)
            entry_point = await self._install(root, args)
        except Exception as e:
            # Install failures and anything unexpected both roll back
            logger.debug("Bootstrap failed at stage %s", self.stage.value, exc_info=True)
            self.rollback(root, app_name, e)
            return 1

        try:
            returncode = ctx.initializer.invoke(
                entry_point, root, app_name, args.verbose, args.original_cwd
            )
        except OSError as e:
            logger.debug("Initializer could not be started", exc_info=True)
            ctx.reporter.line("[red]Could not run the initializer:[/red]")
            ctx.reporter.show_exception(e)
            return 1
        self._advance(BootstrapStage.INITIALIZER_INVOKED)
        return returncode

    def write_manifest(self, root: Path, app_name: str) -> Path:
        """Seed package.json so the package manager can record dependencies."""
        path = root / self.ctx.settings.manifest_file
        self.ctx.filesystem.write_text(path, ProjectManifest(name=app_name).to_json())
        return path

    async def _install(self, root: Path, args: BootstrapArgs) -> Path:
        ctx = self.ctx
        reference = ctx.resolver.resolve(args.scripts_version, args.original_cwd)
        references = [reference]
        self._advance(BootstrapStage.RESOLVED)

        ctx.reporter.line("Installing packages. This might take a couple of minutes.")
        package_name = await ctx.extractor.extract_name(reference, base_dir=root)
        self._advance(BootstrapStage.NAME_EXTRACTED)

        await ctx.installer.install(root, references, args.verbose)
        self._advance(BootstrapStage.INSTALLED)

        return ctx.initializer.locate(root, package_name)

    def rollback(self, root: Path, app_name: str, error: BaseException) -> None:
        """Remove generated artifacts, and root itself if nothing else is left.

        Args:
            root: Project root.
            app_name: Project display name.
            error: The failure that triggered the rollback.
        """
        ctx = self.ctx
        reporter = ctx.reporter
        self._advance(BootstrapStage.ROLLING_BACK)

        reporter.line()
        reporter.line("Aborting installation.")
        if isinstance(error, InstallFailure):
            reporter.line(f"  {cyan(error.command)} has failed.")
        elif isinstance(error, InitializerNotFoundError):
            reporter.show_error(escape(str(error)))
        else:
            reporter.line("[red]Unexpected error. Please report it as a bug:[/red]")
            reporter.show_exception(error)
        reporter.line()

        if ctx.filesystem.exists(root):
            generated = set(ctx.settings.generated_files)
            for entry in ctx.filesystem.listdir(root):
                if entry in generated:
                    reporter.line(f"Deleting generated file... {cyan(entry)}")
                    ctx.filesystem.remove(root / entry)

            if not ctx.filesystem.listdir(root):
                reporter.line(f"Deleting {cyan(f'{app_name}/')} from {cyan(root.parent)}")
                self._leave(root)
                ctx.filesystem.remove(root)

        reporter.line("Done.")
        self._advance(BootstrapStage.ABORTED)

    def _leave(self, root: Path) -> None:
        """Step out of root before it is deleted, if we are inside it."""
        try:
            cwd = Path.cwd().resolve()
        except FileNotFoundError:
            cwd = None
        real_root = root.resolve()
        if cwd is None or cwd == real_root or real_root in cwd.parents:
            os.chdir(root.parent)
