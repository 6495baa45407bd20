"""
Project root detection and path resolution.

The .project-root file marks the repository root. Configuration and log
locations are resolved relative to it; FARS input files are resolved through
resolve_data_dir(), which does not require a project checkout.
"""

import os
from pathlib import Path
from typing import Union

# Environment variable overriding the FARS data directory
DATA_DIR_ENV = "FARS_DATA_DIR"

# Cached project root
_PROJECT_ROOT: Path | None = None


def get_project_root() -> Path:
    """
    Find and return the project root directory.

    Searches upward from this file's location for .project-root marker.
    Result is cached for performance.

    Returns:
        Path to the project root directory.

    Raises:
        FileNotFoundError: If .project-root marker is not found.
    """
    global _PROJECT_ROOT

    if _PROJECT_ROOT is not None:
        return _PROJECT_ROOT

    current = Path(__file__).resolve().parent

    for _ in range(10):  # Limit search depth
        marker = current / ".project-root"
        if marker.exists():
            _PROJECT_ROOT = current
            return _PROJECT_ROOT

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise FileNotFoundError(
        "Could not find .project-root marker. "
        "Ensure you are running from within the FARS toolkit repository."
    )


def get_path(*parts: str) -> Path:
    """
    Resolve a path relative to the project root.

    Args:
        *parts: Path components to join (e.g., "configs", "params.yml")

    Returns:
        Absolute Path object.
    """
    return get_project_root() / Path(*parts)


class Paths:
    """
    Canonical path constants for the project.

    All paths are resolved relative to the project root.
    """

    @property
    def root(self) -> Path:
        """Project root directory."""
        return get_project_root()

    @property
    def configs(self) -> Path:
        return get_path("configs")

    @property
    def params_yml(self) -> Path:
        return get_path("configs", "params.yml")

    @property
    def logs(self) -> Path:
        return get_path("logs")


# Singleton instance for convenience
paths = Paths()


def ensure_dir(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        The Path object for the directory.
    """
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def resolve_data_dir(
    data_dir: Union[str, Path, None] = None,
    configured: Union[str, Path, None] = None,
) -> Path:
    """
    Resolve the directory holding the yearly accident files.

    Lookup order: explicit argument, the FARS_DATA_DIR environment variable,
    the configured directory (relative paths are taken from the project
    root), then the current working directory.

    Args:
        data_dir: Optional explicit directory.
        configured: Optional directory from configs/params.yml.

    Returns:
        Path to the data directory (not checked for existence).
    """
    if data_dir is not None:
        return Path(data_dir)

    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)

    if configured:
        configured = Path(configured)
        if configured.is_absolute():
            return configured
        return get_project_root() / configured

    return Path.cwd()
