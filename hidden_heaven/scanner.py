"""
Package scanning.

Lists the top-level items of a package root. Only names are collected;
classification never depends on item type or contents.
"""

import os
from pathlib import Path

from .errors import InvalidArgument


def normalize_root(root: Path | str) -> Path:
    """Make a package root absolute without resolving symlinks."""
    return Path(os.path.abspath(root))


def list_package_items(root: Path) -> set[str]:
    """
    List the names of all items directly under a package root.
    
    Args:
        root: The package root directory.
        
    Returns:
        Set of file and directory names (dotfiles included).
        
    Raises:
        InvalidArgument: If the root does not exist or is not a directory.
    """
    if not root.exists():
        raise InvalidArgument(f"Package root not found: {root}")
    if not root.is_dir():
        raise InvalidArgument(f"Package root is not a directory: {root}")
    
    with os.scandir(root) as entries:
        return {entry.name for entry in entries}
