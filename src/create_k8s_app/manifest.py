"""package.json models."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ProjectManifest(BaseModel):
    """Manifest seeded into a new project before install."""

    name: str
    version: str = "0.1.0"
    private: bool = True

    def to_json(self) -> str:
        """Serialize with stable field order and a platform newline."""
        return json.dumps(self.model_dump(), indent=2) + os.linesep


class PackageManifest(BaseModel):
    """The part of a package's own package.json we care about."""

    model_config = ConfigDict(extra="allow")

    name: str

    @classmethod
    def from_file(cls, path: Path) -> PackageManifest:
        """Load a package manifest.

        Args:
            path: Path to package.json.

        Returns:
            Parsed PackageManifest.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If JSON is invalid or has no name.
        """
        if not path.exists():
            raise FileNotFoundError(f"Package manifest not found: {path}")
        return cls.model_validate_json(path.read_text(encoding="utf-8"))
