"""Runtime checks performed before a bootstrap starts."""

from __future__ import annotations

import logging
import shutil
import subprocess

from create_k8s_app.types import BootstrapError, clean_semver

logger = logging.getLogger(__name__)


class NodeVersionError(BootstrapError):
    """Node is missing or too old to run the initializer."""

    def __init__(self, found: str | None, minimum_major: int) -> None:
        if found is None:
            message = (
                f"Node could not be found.\n"
                f"create-k8s-app requires Node {minimum_major} or higher."
            )
        else:
            message = (
                f"You are running Node {found}.\n"
                f"create-k8s-app requires Node {minimum_major} or higher.\n"
                "Please update your version of Node."
            )
        super().__init__(message)
        self.found = found
        self.minimum_major = minimum_major


def get_node_version(node_executable: str = "node") -> str | None:
    """Return the installed Node version, or None if node is unavailable."""
    executable = shutil.which(node_executable)
    if executable is None:
        return None
    try:
        completed = subprocess.run(
            [executable, "--version"], capture_output=True, text=True, check=True
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("node --version failed: %s", e)
        return None
    return completed.stdout.strip().lstrip("v") or None


def check_node_version(node_executable: str = "node", minimum_major: int = 8) -> str:
    """Ensure a recent enough Node is on PATH.

    Args:
        node_executable: Node executable name.
        minimum_major: Lowest accepted major version.

    Returns:
        The detected Node version.

    Raises:
        NodeVersionError: If node is missing or older than minimum_major.
    """
    found = get_node_version(node_executable)
    if found is None:
        raise NodeVersionError(None, minimum_major)

    cleaned = clean_semver(found)
    major = int(cleaned.split(".")[0]) if cleaned else None
    if major is None or major < minimum_major:
        raise NodeVersionError(found, minimum_major)
    logger.debug("Found Node %s", found)
    return found
