"""
Link folder management for the hidden-heaven tool.

The link folder (<package>/<link folder name>) holds one symlink per included
item, pointing back at the item in the package root. Its contents are entirely
derived: anything that is not a symlink is treated as corruption and left alone.
"""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .errors import InvalidArgument, ManagedFolderCorrupted, MissingLinkTarget


class LocalLinkFS:
    """Symlink operations against the real filesystem."""

    def exists(self, path: Path) -> bool:
        # Dangling symlinks count as existing entries
        return os.path.lexists(path)

    def target_exists(self, path: Path) -> bool:
        # Follows symlinks: a dangling item in the package root is missing
        return os.path.exists(path)

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def list_dir(self, path: Path) -> set[str]:
        with os.scandir(path) as entries:
            return {entry.name for entry in entries}

    def make_dir(self, path: Path) -> None:
        path.mkdir()

    def create_symlink(self, link: Path, target: Path) -> None:
        os.symlink(target, link, target_is_directory=target.is_dir())

    def remove_symlink(self, link: Path) -> None:
        link.unlink()

    def read_link(self, link: Path) -> str:
        return os.readlink(link)

    def remove_tree(self, path: Path) -> None:
        # rmtree unlinks symlinks without following them
        shutil.rmtree(path)


@dataclass
class LinkOutcome:
    """What ensure_linked changed in the link folder."""
    folder: Path
    created: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    warnings: list[MissingLinkTarget] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.created or self.removed)


class LinkFolderManager:
    """Creates, refreshes and removes link folders through a filesystem capability."""

    def __init__(self, fs=None):
        self.fs = fs or LocalLinkFS()

    def link_folder_path(self, package_root: Path, link_folder_name: str) -> Path:
        return package_root / link_folder_name

    def _check_folder(self, folder: Path) -> bool:
        """Return whether the folder exists; raise if something else sits there."""
        if self.fs.is_symlink(folder):
            raise ManagedFolderCorrupted(folder, "link folder path is a symlink")
        if not self.fs.exists(folder):
            return False
        if not self.fs.is_dir(folder):
            raise ManagedFolderCorrupted(folder, "link folder path is not a directory")
        return True

    def read_linked_items(self, package_root: Path, link_folder_name: str) -> set[str]:
        """
        Names of the symlinks currently in the link folder.
        
        Returns an empty set when the folder does not exist. Entries that are
        not symlinks are ignored here; ensure_linked rejects them.
        """
        folder = self.link_folder_path(package_root, link_folder_name)
        if not self._check_folder(folder):
            return set()
        return {
            name for name in self.fs.list_dir(folder)
            if self.fs.is_symlink(folder / name)
        }

    def ensure_linked(
        self,
        package_root: Path,
        link_folder_name: str,
        included_items: Iterable[str]
    ) -> LinkOutcome:
        """
        Make the link folder contain exactly one symlink per included item.
        
        Creates the folder if missing, adds missing links, repoints links that
        target the wrong path and removes links for items no longer included.
        Running it twice with the same items performs no writes the second time.
        
        Args:
            package_root: Absolute package root.
            link_folder_name: Name of the link folder inside the root.
            included_items: Names of the items to link.
            
        Returns:
            LinkOutcome listing created/removed links and missing-target warnings.
            
        Raises:
            InvalidArgument: If an item name is not a plain name.
            ManagedFolderCorrupted: If the folder holds a non-symlink entry or
                the folder path itself is not a directory.
        """
        included = set(included_items)
        for name in included:
            if not name or name in (".", "..") or "/" in name or os.sep in name:
                raise InvalidArgument(f"Invalid item name: {name!r}")
        if link_folder_name in included:
            raise InvalidArgument(f"The link folder '{link_folder_name}' cannot link itself")

        folder = self.link_folder_path(package_root, link_folder_name)
        outcome = LinkOutcome(folder=folder)

        existing: set[str] = set()
        if self._check_folder(folder):
            existing = self.fs.list_dir(folder)
            # Validate everything before touching anything
            for name in sorted(existing):
                if not self.fs.is_symlink(folder / name):
                    raise ManagedFolderCorrupted(folder / name, "unmanaged entry in link folder")
        else:
            self.fs.make_dir(folder)

        # Stale links
        for name in sorted(existing - included):
            self.fs.remove_symlink(folder / name)
            outcome.removed.append(name)

        for name in sorted(included):
            link = folder / name
            target = package_root / name

            if name in existing:
                if self.fs.read_link(link) != os.fspath(target):
                    self.fs.remove_symlink(link)
                    self.fs.create_symlink(link, target)
                    outcome.created.append(name)
            else:
                self.fs.create_symlink(link, target)
                outcome.created.append(name)

            if not self.fs.target_exists(target):
                outcome.warnings.append(MissingLinkTarget(link, target))

        return outcome

    def remove_link_folder(self, package_root: Path, link_folder_name: str) -> bool:
        """
        Delete the link folder and everything in it.
        
        Returns:
            True if a folder was removed, False if it was already absent.
            
        Raises:
            ManagedFolderCorrupted: If the link folder path is not a directory.
        """
        folder = self.link_folder_path(package_root, link_folder_name)
        if not self._check_folder(folder):
            return False
        self.fs.remove_tree(folder)
        return True


_default_manager = LinkFolderManager()


def ensure_linked(package_root: Path, link_folder_name: str, included_items: Iterable[str]) -> LinkOutcome:
    return _default_manager.ensure_linked(package_root, link_folder_name, included_items)


def remove_link_folder(package_root: Path, link_folder_name: str) -> bool:
    return _default_manager.remove_link_folder(package_root, link_folder_name)


def read_linked_items(package_root: Path, link_folder_name: str) -> set[str]:
    return _default_manager.read_linked_items(package_root, link_folder_name)
