"""Sandboxed storage for the document workspace.

Provides path confinement, collision-free naming, tree traversal, text I/O
and preference persistence.
"""

from .naming import COPY_INFIX, CREATE_INFIX, allocate, allocate_copy_name, split_name
from .path_guard import (
    HIDDEN_PREFIX,
    ensure_within_root,
    expand_root,
    is_hidden,
    normalize_path,
    relative_id,
    safe_join,
    validate_entry_name,
)
from .preferences import PreferencesStore, PreferencesUpdate, UserPreferences
from .tree_walker import copy_file, copy_subtree, iter_files, list_tree

__all__ = [
    # Naming
    "COPY_INFIX",
    "CREATE_INFIX",
    "allocate",
    "allocate_copy_name",
    "split_name",
    # Path guard
    "HIDDEN_PREFIX",
    "ensure_within_root",
    "expand_root",
    "is_hidden",
    "normalize_path",
    "relative_id",
    "safe_join",
    "validate_entry_name",
    # Preferences
    "PreferencesStore",
    "PreferencesUpdate",
    "UserPreferences",
    # Tree walking
    "copy_file",
    "copy_subtree",
    "iter_files",
    "list_tree",
]
