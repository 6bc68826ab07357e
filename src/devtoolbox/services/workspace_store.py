"""Workspace store: sandboxed file operations over tool-scoped folders.

Every public method returns a StoreResult; expected failures (sandbox
escape, missing operand, name collision, platform I/O error) never raise.

Layout::

    <root>/
        json/  xml/  base64/  http/     <- tool scopes (configurable)

Callers identify entries by their root-relative id (``json/a/b.json``).
Relative path arguments are resolved against the current root; absolute
ones are accepted when they lie inside it.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Sequence

import structlog

from devtoolbox.domain.entries import FILE, FOLDER, Entry, MovedEntry, SearchHit
from devtoolbox.domain.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    DevToolboxError,
    IOFailureError,
    NotFoundError,
)
from devtoolbox.infrastructure.storage.io_text import read_text, write_text_atomic
from devtoolbox.infrastructure.storage.naming import allocate, allocate_copy_name
from devtoolbox.infrastructure.storage.path_guard import (
    ensure_within_root,
    expand_root,
    relative_id,
    safe_join,
    validate_entry_name,
)
from devtoolbox.infrastructure.storage.tree_walker import (
    copy_file,
    copy_subtree,
    iter_files,
    list_tree,
)

logger = structlog.get_logger()

DEFAULT_TOOL_SCOPES = ("json", "xml", "base64", "http")


def _to_json_safe(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_to_json_safe(item) for item in value]
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


@dataclass
class StoreResult:
    """Outcome of a workspace operation."""

    success: bool
    data: Any = None
    error: str = ""
    error_code: str = ""

    @classmethod
    def ok(cls, data: Any = None) -> "StoreResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: DevToolboxError) -> "StoreResult":
        return cls(success=False, error=str(exc), error_code=exc.code)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.error:
            result["error"] = self.error
            result["errorCode"] = self.error_code
        if self.data is not None:
            result["data"] = _to_json_safe(self.data)
        return result


def _is_within(parent: Path, candidate: Path) -> bool:
    try:
        return os.path.commonpath([str(parent), str(candidate)]) == str(parent)
    except ValueError:
        return False


class WorkspaceStore:
    """Owns the current workspace root and every operation beneath it.

    The store keeps no locks. Concurrent callers may race between a name
    availability check and the create/copy that follows, and a root change
    is not coordinated with calls still using the old root; integrators
    serialize access when they need stronger guarantees.
    """

    def __init__(self, root: str | Path, tool_scopes: Iterable[str] = DEFAULT_TOOL_SCOPES):
        self._tool_scopes = tuple(validate_entry_name(scope) for scope in tool_scopes)
        root_path = expand_root(root)
        self._ensure_layout(root_path)
        self._root = root_path

    @property
    def root(self) -> Path:
        return self._root

    @property
    def tool_scopes(self) -> Sequence[str]:
        return self._tool_scopes

    # -------------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------------

    def _ensure_layout(self, root: Path) -> None:
        os.makedirs(root, exist_ok=True)
        for scope in self._tool_scopes:
            os.makedirs(root / scope, exist_ok=True)

    def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> StoreResult:
        try:
            return StoreResult.ok(func(*args))
        except DevToolboxError as exc:
            logger.warning("workspace_operation_refused", operation=operation, error=str(exc))
            return StoreResult.fail(exc)
        except OSError as exc:
            logger.error("workspace_operation_failed", operation=operation, error=str(exc))
            return StoreResult.fail(IOFailureError(f"{operation} failed: {exc}"))

    def _guard(self, path: str | Path) -> Path:
        return ensure_within_root(self._root, path)

    def _check_tool(self, tool: str) -> str:
        if tool not in self._tool_scopes:
            raise AccessDeniedError(f"unknown tool scope: {tool!r}")
        return tool

    def _tool_dir(self, tool: str) -> Path:
        directory = self._root / self._check_tool(tool)
        os.makedirs(directory, exist_ok=True)
        return directory

    def _protect(self, path: Path) -> None:
        if path == self._root or (path.parent == self._root and path.name in self._tool_scopes):
            raise AccessDeniedError(f"protected workspace folder: {path}")

    def _identity(self, path: Path) -> str:
        return relative_id(self._root, path)

    def _target_dir(self, tool: str, parent_path: str) -> Path:
        self._check_tool(tool)
        if not parent_path:
            return self._tool_dir(tool)
        directory = self._guard(parent_path)
        os.makedirs(directory, exist_ok=True)
        return directory

    # -------------------------------------------------------------------------
    # Root
    # -------------------------------------------------------------------------

    def set_root(self, new_root: str | Path) -> StoreResult:
        """Switch the workspace root, creating it and its tool scopes."""
        return self._run("set_root", self._set_root, new_root)

    def _set_root(self, new_root: str | Path) -> Dict[str, str]:
        root = expand_root(new_root)
        self._ensure_layout(root)
        previous, self._root = self._root, root
        logger.info("workspace_root_changed", previous=str(previous), root=str(root))
        return {"root": str(root)}

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_file(self, tool: str, parent_path: str, file_name: str) -> StoreResult:
        """Create an empty file, suffixing ``_N`` on collision."""
        return self._run("create_file", self._create_file, tool, parent_path, file_name)

    def _create_file(self, tool: str, parent_path: str, file_name: str) -> Entry:
        validate_entry_name(file_name)
        directory = self._target_dir(tool, parent_path)
        final_name = allocate(directory, file_name)
        path = directory / final_name
        with open(path, "x", encoding="utf-8"):
            pass
        logger.info("file_created", id=self._identity(path))
        return Entry(id=self._identity(path), name=final_name, type=FILE, path=str(path))

    def create_folder(self, tool: str, parent_path: str, folder_name: str) -> StoreResult:
        """Create an empty folder, suffixing ``_N`` on collision."""
        return self._run("create_folder", self._create_folder, tool, parent_path, folder_name)

    def _create_folder(self, tool: str, parent_path: str, folder_name: str) -> Entry:
        validate_entry_name(folder_name)
        directory = self._target_dir(tool, parent_path)
        final_name = allocate(directory, folder_name, is_folder=True)
        path = directory / final_name
        os.mkdir(path)
        logger.info("folder_created", id=self._identity(path))
        return Entry(
            id=self._identity(path),
            name=final_name,
            type=FOLDER,
            path=str(path),
            children=[],
            expanded=True,
        )

    # -------------------------------------------------------------------------
    # Rename / delete
    # -------------------------------------------------------------------------

    def rename(self, path: str, new_name: str) -> StoreResult:
        """Rename in place; refuses when a sibling already has `new_name`."""
        return self._run("rename", self._rename, path, new_name)

    def _rename(self, path: str, new_name: str) -> MovedEntry:
        validate_entry_name(new_name)
        source = self._guard(path)
        self._protect(source)
        if not os.path.lexists(source):
            raise NotFoundError(f"file or folder does not exist: {source}")

        target = safe_join(source.parent, new_name)
        if os.path.lexists(target):
            raise AlreadyExistsError("a file or folder with that name already exists")

        os.rename(source, target)
        logger.info("entry_renamed", source=self._identity(source), target=self._identity(target))
        return MovedEntry(
            id=self._identity(target),
            path=str(target),
            name=new_name,
            extra={"newName": new_name},
        )

    def delete(self, path: str) -> StoreResult:
        """Remove a file or a folder with everything beneath it."""
        return self._run("delete", self._delete, path)

    def _delete(self, path: str) -> None:
        target = self._guard(path)
        self._protect(target)
        if not os.path.lexists(target):
            raise NotFoundError(f"file or folder does not exist: {target}")

        if os.path.isdir(target) and not os.path.islink(target):
            shutil.rmtree(target)
        else:
            os.remove(target)
        logger.info("entry_deleted", id=self._identity(target))
        return None

    # -------------------------------------------------------------------------
    # Copy / move
    # -------------------------------------------------------------------------

    def copy(self, src: str, dst: str) -> StoreResult:
        """Copy `src` to `dst`, suffixing ``_copy_N`` while `dst` is taken."""
        return self._run("copy", self._copy, src, dst)

    def duplicate(self, src: str) -> StoreResult:
        """Copy next to the source: ``note.txt`` -> ``note_copy_1.txt``."""
        return self._run("duplicate", self._copy, src, src)

    def _copy(self, src: str, dst: str) -> MovedEntry:
        source = self._guard(src)
        destination = self._guard(dst)
        if not os.path.exists(source):
            raise NotFoundError(f"source does not exist: {source}")

        dest_dir = self._guard(destination.parent)
        if not os.path.isdir(dest_dir):
            raise NotFoundError(f"destination folder does not exist: {dest_dir}")

        is_folder = os.path.isdir(source)
        if is_folder and _is_within(source, dest_dir):
            raise IOFailureError("cannot copy a folder into itself")

        final_name = allocate_copy_name(dest_dir, destination.name, is_folder=is_folder)
        target = dest_dir / final_name
        if is_folder:
            copy_subtree(source, target)
        else:
            copy_file(source, target)

        logger.info("entry_copied", source=self._identity(source), target=self._identity(target))
        return MovedEntry(id=self._identity(target), path=str(target), name=final_name)

    def move(self, src: str, dest_dir: str) -> StoreResult:
        """Move into `dest_dir`; refuses when the name is taken there."""
        return self._run("move", self._move, src, dest_dir)

    def _move(self, src: str, dest_dir: str) -> MovedEntry:
        source = self._guard(src)
        destination_dir = self._guard(dest_dir)
        self._protect(source)
        if not os.path.lexists(source):
            raise NotFoundError(f"source does not exist: {source}")
        if not os.path.isdir(destination_dir):
            raise NotFoundError(f"destination folder does not exist: {destination_dir}")
        if os.path.isdir(source) and _is_within(source, destination_dir):
            raise IOFailureError("cannot move a folder into itself")

        target = destination_dir / source.name
        if os.path.lexists(target):
            raise AlreadyExistsError("a file with that name already exists in the destination")

        os.rename(source, target)
        logger.info("entry_moved", source=self._identity(source), target=self._identity(target))
        return MovedEntry(id=self._identity(target), path=str(target), name=source.name)

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def read(self, path: str) -> StoreResult:
        """Read a file as UTF-8 text."""
        return self._run("read", self._read, path)

    def _read(self, path: str) -> str:
        target = self._guard(path)
        if not os.path.exists(target):
            raise NotFoundError(f"file does not exist: {target}")
        if os.path.isdir(target):
            raise IOFailureError(f"cannot read a folder: {target}")
        return read_text(str(target))

    def write(self, path: str, content: str) -> StoreResult:
        """Replace a file's content, creating it if needed."""
        return self._run("write", self._write, path, content)

    def _write(self, path: str, content: str) -> Dict[str, Any]:
        target = self._guard(path)
        if os.path.isdir(target):
            raise IOFailureError(f"cannot write to a folder: {target}")
        written = write_text_atomic(str(target), content)
        logger.info("file_saved", id=self._identity(target), bytes=written)
        return {"id": self._identity(target), "path": str(target), "bytesWritten": written}

    # -------------------------------------------------------------------------
    # Listing / search
    # -------------------------------------------------------------------------

    def list(self, tool: str) -> StoreResult:
        """Full Entry tree of one tool scope."""
        return self._run("list", self._list, tool)

    def _list(self, tool: str) -> List[Entry]:
        return list_tree(self._tool_dir(tool), self._root)

    def search(self, query: str) -> StoreResult:
        """Case-insensitive occurrence count per file across all tool scopes."""
        return self._run("search", self._search, query)

    def _search(self, query: str) -> List[SearchHit]:
        hits: List[SearchHit] = []
        if not query:
            return hits

        needle = query.lower()
        for tool in self._tool_scopes:
            tool_dir = self._root / tool
            if not os.path.isdir(tool_dir):
                continue
            for file_path in iter_files(tool_dir):
                try:
                    content = read_text(str(file_path))
                except OSError as exc:
                    logger.debug("search_file_skipped", path=str(file_path), error=str(exc))
                    continue
                count = content.lower().count(needle)
                if count:
                    hits.append(
                        SearchHit(
                            file_id=self._identity(file_path),
                            file_name=file_path.name,
                            tool_name=tool,
                            count=count,
                        )
                    )
        return hits
