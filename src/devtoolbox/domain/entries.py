"""Workspace snapshot types.

Entries are rebuilt from disk on every listing; nothing here is cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

FILE = "file"
FOLDER = "folder"


@dataclass
class Entry:
    """A file or folder in a workspace listing.

    `id` is the slash-joined path relative to the workspace root and is the
    only value callers should keep between calls.
    """

    id: str
    name: str
    type: str
    path: str
    children: Optional[List["Entry"]] = None
    expanded: bool = False

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "path": self.path,
        }
        if self.is_folder:
            data["children"] = [child.to_dict() for child in self.children or []]
            data["expanded"] = self.expanded
        return data


@dataclass(frozen=True)
class SearchHit:
    """A file containing at least one occurrence of a search query."""

    file_id: str
    file_name: str
    tool_name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileId": self.file_id,
            "fileName": self.file_name,
            "toolName": self.tool_name,
            "count": self.count,
        }


@dataclass
class MovedEntry:
    """Identity of an entry after rename, copy or move."""

    id: str
    path: str
    name: str
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "path": self.path, "name": self.name}
        data.update(self.extra)
        return data
