"""Recursive directory listing and subtree copy."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterator, List

import structlog

from devtoolbox.domain.entries import FILE, FOLDER, Entry
from devtoolbox.infrastructure.storage.path_guard import is_hidden, relative_id

logger = structlog.get_logger()


def _sort_key(entry: os.DirEntry) -> tuple[int, str]:
    # Folders first, then files; each group by name.
    return (0 if _is_dir(entry) else 1, entry.name)


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _scan_sorted(directory: str | Path) -> List[os.DirEntry]:
    with os.scandir(directory) as it:
        entries = [entry for entry in it if not is_hidden(entry.name)]
    entries.sort(key=_sort_key)
    return entries


def list_tree(directory: str | Path, root: str | Path) -> List[Entry]:
    """Eagerly build the Entry tree below `directory`.

    Hidden names are dropped before recursion. A subdirectory that cannot be
    opened is reported with no children; only a failure on `directory`
    itself raises.
    """
    items: List[Entry] = []
    for dir_entry in _scan_sorted(directory):
        full_path = os.path.join(directory, dir_entry.name)
        item = Entry(
            id=relative_id(root, full_path),
            name=dir_entry.name,
            type=FILE,
            path=full_path,
        )
        if _is_dir(dir_entry):
            item.type = FOLDER
            try:
                item.children = list_tree(full_path, root)
            except OSError as exc:
                logger.debug("list_subtree_skipped", path=full_path, error=str(exc))
                item.children = []
        items.append(item)
    return items


def iter_files(directory: str | Path) -> Iterator[Path]:
    """Depth-first, name-ordered walk over non-hidden files.

    Hidden directories are pruned; unreadable directories are skipped.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug("walk_directory_skipped", path=str(directory), error=str(exc))
        return

    for entry in entries:
        if is_hidden(entry.name):
            continue
        if _is_dir(entry):
            yield from iter_files(entry.path)
        else:
            yield Path(entry.path)


def copy_file(src: str | Path, dst: str | Path) -> None:
    """Byte-for-byte copy preserving the source permission bits."""
    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


def copy_subtree(src: str | Path, dst: str | Path) -> None:
    """Recursively copy `src` to `dst`.

    The first failure propagates and stops further descent; already written
    entries are left in place. Hidden entries are copied too.
    """
    os.makedirs(dst, exist_ok=True)
    with os.scandir(src) as it:
        children = list(it)

    for child in children:
        target = os.path.join(dst, child.name)
        if child.is_dir(follow_symlinks=False):
            copy_subtree(child.path, target)
        else:
            copy_file(child.path, target)

    # Mode is mirrored only after the children are written.
    shutil.copymode(src, dst)
