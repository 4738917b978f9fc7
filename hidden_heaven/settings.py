"""
Editor settings synchronization for the hidden-heaven tool.

Maintains the "files.exclude" mapping of a package's .vscode/settings.json.
The document is kept as a plain dict so unknown fields survive verbatim; only
the exclusion mapping is touched. Every call reads the file fresh.
"""

import json
import os
from pathlib import Path
from typing import Iterable

from .config import SETTINGS_DIR, SETTINGS_FILE, EXCLUDE_KEY, MANAGED_RECORD_FILE
from .errors import MalformedSettings
from .utils import load_json, save_json


def settings_path(package_root: Path) -> Path:
    """Location of a package's editor settings file."""
    return package_root / SETTINGS_DIR / SETTINGS_FILE


def exclusion_path(package_root: Path, item_name: str) -> str:
    """Absolute path string used as the exclusion key for an item."""
    return os.fspath(package_root / item_name)


def read_settings(path: Path) -> dict:
    """
    Read a settings document.
    
    Args:
        path: Path to settings.json.
        
    Returns:
        The parsed document. A missing file yields {"files.exclude": {}};
        a document without the key gets an empty mapping added.
        
    Raises:
        MalformedSettings: If the file is not valid JSON, or the document or
            its exclusion mapping is not a JSON object.
    """
    document, _ = _load_document(path)
    return document


def _load_document(path: Path) -> tuple[dict, bool]:
    """Parse the document; also report whether the exclusion key is on disk."""
    if not path.exists():
        return {EXCLUDE_KEY: {}}, False

    try:
        document = load_json(path)
    except json.JSONDecodeError as e:
        raise MalformedSettings(path, f"invalid JSON ({e})") from e
    except UnicodeDecodeError as e:
        raise MalformedSettings(path, f"not UTF-8 text ({e})") from e

    if not isinstance(document, dict):
        raise MalformedSettings(path, "settings document is not a JSON object")

    stored = EXCLUDE_KEY in document
    exclusions = document.setdefault(EXCLUDE_KEY, {})
    if not isinstance(exclusions, dict):
        raise MalformedSettings(path, f"'{EXCLUDE_KEY}' is not a JSON object")

    return document, stored


def write_settings(path: Path, document: dict) -> None:
    """Write a settings document, creating the settings directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    save_json(document, path)


def apply_exclusions(
    path: Path,
    absolute_paths: Iterable[str],
    stale_paths: Iterable[str] = ()
) -> bool:
    """
    Merge managed exclusions into a settings file.
    
    Each path in absolute_paths is set to true. Entries listed in stale_paths
    (managed on a previous run, no longer included) are removed unless they
    are being re-applied. All other entries and fields are left as they are.
    
    Args:
        path: Path to settings.json.
        absolute_paths: Absolute paths of the currently linked items.
        stale_paths: Absolute paths this tool managed before.
        
    Returns:
        True if the file was written.
    """
    current = set(absolute_paths)
    document, stored = _load_document(path)
    exclusions = document[EXCLUDE_KEY]
    before = dict(exclusions)

    for stale in stale_paths:
        if stale not in current:
            exclusions.pop(stale, None)

    for item_path in sorted(current):
        exclusions[item_path] = True

    if stored and exclusions == before:
        return False

    write_settings(path, document)
    return True


def clear_exclusions(path: Path) -> bool:
    """
    Empty the exclusion mapping, keeping every other field.
    
    The file is created when absent so the reset state is always on disk.
    
    Returns:
        True if the file was written.
    """
    document, stored = _load_document(path)
    if stored and document[EXCLUDE_KEY] == {}:
        return False

    document[EXCLUDE_KEY] = {}
    write_settings(path, document)
    return True


def drop_exclusions(path: Path, absolute_paths: Iterable[str]) -> bool:
    """
    Remove the given entries from the exclusion mapping.
    
    Un-hiding is always safe, so this runs before the link folder is
    refreshed. A missing file is left missing.
    
    Returns:
        True if the file was written.
        
    Raises:
        MalformedSettings: If the existing file cannot be used.
    """
    document, stored = _load_document(path)
    exclusions = document[EXCLUDE_KEY]

    removed = [p for p in absolute_paths if p in exclusions]
    for item_path in removed:
        del exclusions[item_path]
    if not stored or not removed:
        return False

    write_settings(path, document)
    return True


# -----------------------------------------------------------------------------
# Managed record
# -----------------------------------------------------------------------------

def managed_record_path(package_root: Path) -> Path:
    """Location of the record of exclusions written by this tool."""
    return package_root / SETTINGS_DIR / MANAGED_RECORD_FILE


def read_managed_paths(path: Path) -> set[str]:
    """
    Read the exclusion paths recorded by the last completed Hide.
    
    Returns an empty set when no record exists.
    
    Raises:
        MalformedSettings: If the record is not a JSON object with a
            "managed" list of strings.
    """
    if not path.exists():
        return set()

    try:
        record = load_json(path)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedSettings(path, f"invalid managed record ({e})") from e

    managed = record.get("managed") if isinstance(record, dict) else None
    if not isinstance(managed, list) or not all(isinstance(p, str) for p in managed):
        raise MalformedSettings(path, "'managed' must be a list of paths")
    return set(managed)


def write_managed_paths(path: Path, absolute_paths: Iterable[str]) -> bool:
    """
    Record the exclusion paths this tool now manages.
    
    Returns:
        True if the record was written.
    """
    managed = sorted(set(absolute_paths))
    if path.exists():
        if read_managed_paths(path) == set(managed):
            return False
    elif not managed:
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    save_json({"managed": managed}, path)
    return True


def remove_managed_record(path: Path) -> bool:
    """Delete the managed record; returns whether one existed."""
    if not path.exists():
        return False
    path.unlink()
    return True
