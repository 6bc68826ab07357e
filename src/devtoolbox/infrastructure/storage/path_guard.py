"""Workspace sandbox: every path an operation touches must resolve inside the root.

Comparison is done on normalized path segments, so a sibling such as
``/data/notes-old`` is rejected for the root ``/data/notes`` even though the
raw strings share a prefix.
"""

from __future__ import annotations

import os
from pathlib import Path

from devtoolbox.domain.errors import AccessDeniedError


HIDDEN_PREFIX = "."

_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


def expand_root(path: str | Path) -> Path:
    """Expand ``~`` and return the absolute, lexically normalized root."""
    raw = str(path or "").strip()
    if not raw:
        raise AccessDeniedError("workspace root is required")
    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(raw))))


def normalize_path(path: str | Path, base: str | Path | None = None) -> Path:
    """Absolute, lexically normalized form of `path`.

    Relative paths are joined onto `base` when given, otherwise onto the
    process working directory. Symlinks are not followed.
    """
    raw = str(path or "").strip()
    if not raw:
        raise AccessDeniedError("path is required")
    if base is not None and not os.path.isabs(raw):
        raw = os.path.join(str(base), raw)
    return Path(os.path.normpath(os.path.abspath(raw)))


def ensure_within_root(root: str | Path, path: str | Path) -> Path:
    """Ensure `path` is `root` or lies beneath it; return the normalized path."""
    root_path = normalize_path(root)
    candidate = normalize_path(path, base=root_path)

    try:
        common = os.path.commonpath([str(root_path), str(candidate)])
    except ValueError as exc:
        raise AccessDeniedError(f"path escapes workspace root: {candidate}") from exc

    if common != str(root_path):
        raise AccessDeniedError(f"path escapes workspace root: {candidate}")
    return candidate


def safe_join(root: str | Path, *parts: str) -> Path:
    base = normalize_path(root)
    return ensure_within_root(base, base.joinpath(*parts))


def validate_entry_name(name: str) -> str:
    """A caller-supplied entry name must be exactly one path segment."""
    value = str(name or "")
    if not value.strip() or value in (".", ".."):
        raise AccessDeniedError(f"invalid entry name: {name!r}")
    if any(ch in value for ch in _FORBIDDEN_NAME_CHARS):
        raise AccessDeniedError(f"invalid entry name: {name!r}")
    return value


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def relative_id(root: str | Path, path: str | Path) -> str:
    """Slash-joined identity of `path` relative to `root` ("" for the root)."""
    rel = Path(os.path.relpath(str(path), str(root))).as_posix()
    return "" if rel == "." else rel
