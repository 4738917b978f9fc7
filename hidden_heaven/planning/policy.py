"""
Item classification for the hidden-heaven tool.

A policy is plain data: include/exclude lists of names or shell-style glob
patterns. Classification only looks at item names, never at the filesystem.
"""

from dataclasses import dataclass, replace
from fnmatch import fnmatchcase
from typing import Iterable

from ..errors import InvalidArgument


@dataclass(frozen=True)
class HidePolicy:
    """
    Decides which top-level items of a package get linked and hidden.

    An item is included when it matches at least one include pattern, no
    exclude pattern and no reserved name. Exclude always beats include.
    """
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    reserved: tuple[str, ...] = ()

    def __post_init__(self):
        # Stored as tuples so a shared policy (DEFAULT_POLICY) cannot be mutated
        for name in ("include", "exclude", "reserved"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def is_included(self, name: str) -> bool:
        """
        Check if a single item name is included by this policy.
        
        Args:
            name: Item name (file or directory name, no path).
            
        Returns:
            True if the item should be linked and hidden.
        """
        if name in self.reserved:
            return False
        if _matches_any(name, self.exclude):
            return False
        return _matches_any(name, self.include)

    def with_reserved(self, *names: str) -> "HidePolicy":
        """Return a copy that never includes the given names."""
        reserved = list(self.reserved)
        reserved.extend(n for n in names if n not in reserved)
        return replace(self, reserved=tuple(reserved))

    @classmethod
    def from_dict(cls, data: dict) -> "HidePolicy":
        """Create a HidePolicy from a dict (e.g., from a JSON policy file)."""
        if not isinstance(data, dict):
            raise InvalidArgument(f"Policy must be a JSON object, got {type(data).__name__}")
        return cls(
            include=_string_list(data, "include"),
            exclude=_string_list(data, "exclude"),
        )

    def to_dict(self) -> dict:
        return {"include": list(self.include), "exclude": list(self.exclude)}


def _matches_any(name: str, patterns: Iterable[str]) -> bool:
    return any(name == p or fnmatchcase(name, p) for p in patterns)


def _string_list(data: dict, key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidArgument(f"Policy field '{key}' must be a list of strings")
    return list(value)


# Tooling noise commonly found at the root of a JS/TS package
DEFAULT_POLICY = HidePolicy(
    include=[
        "node_modules",
        "dist",
        "coverage",
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        ".eslintrc*",
        ".eslintignore",
        ".prettierrc*",
        ".prettierignore",
        ".editorconfig",
        ".npmrc",
        ".nvmrc",
        ".husky",
        "tsconfig*.json",
        "*.config.js",
        "*.config.cjs",
        "*.config.mjs",
        "*.config.ts",
    ],
    exclude=[
        "package.json",
        "src",
    ],
)


def classify_items(
    item_names: Iterable[str],
    policy: HidePolicy
) -> tuple[set[str], set[str]]:
    """
    Partition a package's items into included and excluded sets.
    
    Every name lands in exactly one of the two sets.
    
    Args:
        item_names: Names of the items at the package root.
        policy: Active hide policy.
        
    Returns:
        (included, excluded) name sets.
    """
    included: set[str] = set()
    excluded: set[str] = set()
    
    for name in item_names:
        if policy.is_included(name):
            included.add(name)
        else:
            excluded.add(name)
    
    return included, excluded


def classify_item(name: str, item_names: Iterable[str], policy: HidePolicy) -> bool:
    """
    Classify one item of a known listing.
    
    Raises:
        InvalidArgument: If the name is not part of the listing.
    """
    if name not in set(item_names):
        raise InvalidArgument(f"Item '{name}' is not in the package listing")
    return policy.is_included(name)
