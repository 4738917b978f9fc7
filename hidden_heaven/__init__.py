"""
hidden-heaven
=============

Moves a package's tooling noise out of sight: selected items are linked into a
dedicated link folder and hidden from the VS Code file tree through
"files.exclude", while staying on disk.
"""

__version__ = "1.0.0"

from .config import Mode, RunConfig, DEFAULT_LINK_FOLDER_NAME
from .errors import (
    HiddenHeavenError,
    InvalidArgument,
    ManagedFolderCorrupted,
    MalformedSettings,
    MissingLinkTarget,
)
from .linker import LinkFolderManager, LocalLinkFS, ensure_linked, remove_link_folder
from .orchestrator import run, hide_package, reset_package, RunReport, PackageResult
from .planning import HidePolicy, DEFAULT_POLICY, classify_items, classify_item
from .settings import read_settings, apply_exclusions, drop_exclusions, clear_exclusions, settings_path

__all__ = [
    "Mode",
    "RunConfig",
    "DEFAULT_LINK_FOLDER_NAME",
    "HiddenHeavenError",
    "InvalidArgument",
    "ManagedFolderCorrupted",
    "MalformedSettings",
    "MissingLinkTarget",
    "LinkFolderManager",
    "LocalLinkFS",
    "ensure_linked",
    "remove_link_folder",
    "run",
    "hide_package",
    "reset_package",
    "RunReport",
    "PackageResult",
    "HidePolicy",
    "DEFAULT_POLICY",
    "classify_items",
    "classify_item",
    "read_settings",
    "apply_exclusions",
    "drop_exclusions",
    "clear_exclusions",
    "settings_path",
]
