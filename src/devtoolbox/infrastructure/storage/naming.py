"""Collision-free entry naming.

Two suffix schemes exist and stay distinct per operation:

- creation: ``stem_1.ext``, ``stem_2.ext``, ...
- copy/duplicate: ``stem_copy_1.ext``, ``stem_copy_2.ext``, ...

The existence check and the later create/copy are not atomic as a pair.
Two concurrent callers can both observe a name as free; whoever creates
second either fails (exclusive create) or overwrites (copy). The store does
not lock; callers that need stronger guarantees must serialize access.
"""

from __future__ import annotations

import itertools
import os
from pathlib import Path
from typing import Tuple

CREATE_INFIX = "_"
COPY_INFIX = "_copy_"


def split_name(name: str, *, is_folder: bool = False) -> Tuple[str, str]:
    """Split into (stem, extension); the extension keeps its leading dot.

    Folders never have an extension. A name whose only dot is the first
    character (``.env``) is treated as all extension, as the last-dot rule
    implies.
    """
    if is_folder:
        return name, ""
    index = name.rfind(".")
    if index < 0:
        return name, ""
    return name[:index], name[index:]


def allocate(
    directory: str | Path,
    desired_name: str,
    *,
    is_folder: bool = False,
    infix: str = CREATE_INFIX,
) -> str:
    """Return `desired_name` or the first free ``stem<infix>N<ext>`` in `directory`."""
    if not os.path.lexists(os.path.join(directory, desired_name)):
        return desired_name

    stem, ext = split_name(desired_name, is_folder=is_folder)
    for counter in itertools.count(1):
        candidate = f"{stem}{infix}{counter}{ext}"
        if not os.path.lexists(os.path.join(directory, candidate)):
            return candidate
    raise AssertionError("unreachable")


def allocate_copy_name(directory: str | Path, desired_name: str, *, is_folder: bool = False) -> str:
    return allocate(directory, desired_name, is_folder=is_folder, infix=COPY_INFIX)
