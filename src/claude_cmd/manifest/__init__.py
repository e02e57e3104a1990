"""Manifest data model and comparison."""

from .diff import (
    ChangeSummary,
    ChangeType,
    CommandChange,
    CommandChangeDetails,
    ComparisonResult,
    compare_manifests,
    manifests_identical,
)
from .models import Command, Manifest, is_safe_relative_path, normalize_allowed_tools

__all__ = [
    "ChangeSummary",
    "ChangeType",
    "Command",
    "CommandChange",
    "CommandChangeDetails",
    "ComparisonResult",
    "Manifest",
    "compare_manifests",
    "is_safe_relative_path",
    "manifests_identical",
    "normalize_allowed_tools",
]
