"""
Run configuration for the hidden-heaven tool.

Resolves the link folder name and the hide policy from CLI values,
environment variables and defaults.
"""

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import InvalidArgument
from .planning.policy import HidePolicy, DEFAULT_POLICY
from .utils import load_json

DEFAULT_LINK_FOLDER_NAME = "hidden-heaven"

# Per-package editor settings location
SETTINGS_DIR = ".vscode"
SETTINGS_FILE = "settings.json"
EXCLUDE_KEY = "files.exclude"
# Paths this tool put into files.exclude, kept next to the settings file
MANAGED_RECORD_FILE = "hidden-heaven.json"

ENV_LINK_FOLDER_NAME = "HIDDEN_HEAVEN_LINK_FOLDER_NAME"


class Mode(Enum):
    HIDE = "hide"
    RESET = "reset"


@dataclass
class RunConfig:
    """Resolved configuration consumed by the orchestrator."""
    link_folder_name: str = DEFAULT_LINK_FOLDER_NAME
    mode: Mode = Mode.HIDE
    policy: HidePolicy = field(default_factory=lambda: DEFAULT_POLICY)

    def __post_init__(self):
        validate_link_folder_name(self.link_folder_name)

    def effective_policy(self) -> HidePolicy:
        """Policy with the tool's own artifacts reserved (never linked)."""
        return self.policy.with_reserved(self.link_folder_name, SETTINGS_DIR)


def validate_link_folder_name(name: str) -> str:
    """
    Check that a link folder name is a single path segment.

    Raises:
        InvalidArgument: If the name is empty, '.', '..' or contains a separator.
    """
    if not name or name in (".", ".."):
        raise InvalidArgument(f"Invalid link folder name: {name!r}")
    if "/" in name or (os.sep != "/" and os.sep in name):
        raise InvalidArgument(f"Link folder name must not contain a path separator: {name!r}")
    return name


def resolve_link_folder_name(cli_value: str | None = None) -> str:
    """CLI flag wins over the environment, which wins over the default."""
    name = cli_value or os.environ.get(ENV_LINK_FOLDER_NAME) or DEFAULT_LINK_FOLDER_NAME
    return validate_link_folder_name(name)


def split_names(value: str | None) -> list[str]:
    """Split a comma-separated CLI list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def load_policy_file(path: Path) -> HidePolicy:
    """
    Load a hide policy from a JSON file.

    Expected shape: {"include": [...], "exclude": [...]}

    Raises:
        InvalidArgument: If the file is missing, not JSON, or has the wrong shape.
    """
    if not path.exists():
        raise InvalidArgument(f"Policy file not found: {path}")
    try:
        data = load_json(path)
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"Policy file is not valid JSON: {path} ({e})") from e
    return HidePolicy.from_dict(data)


def resolve_policy(
    policy_file: Path | None = None,
    include: str | None = None,
    exclude: str | None = None
) -> HidePolicy:
    """
    Pick the active policy.

    A policy file wins outright. Otherwise --include replaces the default
    include list and --exclude extends the default exclude list.
    """
    if policy_file is not None:
        return load_policy_file(policy_file)

    include_names = split_names(include)
    exclude_names = split_names(exclude)
    if not include_names and not exclude_names:
        return DEFAULT_POLICY

    return HidePolicy(
        include=include_names or list(DEFAULT_POLICY.include),
        exclude=list(DEFAULT_POLICY.exclude) + exclude_names,
    )
