"""
🔍 Path Utilities
Locate the project root and prepare output directories
"""

from pathlib import Path
from typing import Optional, Union

PROJECT_MARKERS = ("pyproject.toml", "genopt/__init__.py")


def detect_project_root(start_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Walk up from ``start_path`` looking for the project marker files.

    Args:
        start_path: Directory to start from (defaults to the current working directory)

    Returns:
        Optional[Path]: Directory holding every marker, or None when not found
    """
    current_path = Path(start_path) if start_path is not None else Path.cwd()
    current_path = current_path.resolve()

    for candidate in (current_path, *current_path.parents):
        if all((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate

    return None


def get_project_root() -> Path:
    """Project root when running from a checkout, the working directory otherwise."""
    return detect_project_root() or Path.cwd().resolve()


def ensure_directory_exists(path: Union[str, Path], relative_to_project: bool = True) -> Path:
    """
    Create ``path`` (and parents) if needed.

    Args:
        path: Directory to create
        relative_to_project: Resolve relative paths against the project root

    Returns:
        Path: Absolute path of the directory
    """
    path = Path(path)
    if relative_to_project and not path.is_absolute():
        path = get_project_root() / path

    path.mkdir(parents=True, exist_ok=True)
    return path.resolve()
