"""Settings for create-k8s-app."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Files that may already exist in a fresh project directory
DEFAULT_VALID_FILES = [
    ".DS_Store",
    "Thumbs.db",
    ".git",
    ".gitignore",
    "README.md",
    "LICENSE",
    ".npmignore",
    "docs",
    ".gitlab-ci.yml",
    ".gitattributes",
]

# Left behind by a failed install, removed silently on the next run
DEFAULT_ERROR_LOG_PREFIXES = ["npm-debug.log"]


class Settings(BaseModel):
    """Fixed names and defaults used across a bootstrap run."""

    model_config = ConfigDict(frozen=True)

    scripts_package: str = "k8s-scripts"
    package_manager: str = "npm"
    node_executable: str = "node"
    minimum_node_major: int = 8
    manifest_file: str = "package.json"
    dependency_dir: str = "node_modules"
    initializer_path: tuple[str, ...] = ("scripts", "init.js")
    valid_files: list[str] = Field(default_factory=lambda: list(DEFAULT_VALID_FILES))
    error_log_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ERROR_LOG_PREFIXES)
    )

    @property
    def generated_files(self) -> list[str]:
        """Artifacts created by a run, removed again on rollback."""
        return [self.manifest_file, self.dependency_dir]
