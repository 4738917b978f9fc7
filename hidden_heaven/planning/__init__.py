"""
Planning module for the hidden-heaven tool.

Provides:
- Hide policies (include/exclude name patterns)
- Item classification
"""

from .policy import (
    HidePolicy,
    DEFAULT_POLICY,
    classify_items,
    classify_item,
)

__all__ = [
    "HidePolicy",
    "DEFAULT_POLICY",
    "classify_items",
    "classify_item",
]
