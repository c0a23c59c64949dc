"""Bootstrap a new Kubernetes app from a scripts package."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from create_k8s_app.protocols import (
    FileSystem,
    Initializer,
    NameExtractor,
    PackageInstaller,
)

__all__ = [
    "__version__",
    "FileSystem",
    "Initializer",
    "NameExtractor",
    "PackageInstaller",
]
