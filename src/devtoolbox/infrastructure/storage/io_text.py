"""Text and JSON file utilities."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from typing import Any, Dict, Optional


def _fsync_enabled() -> bool:
    """Check if fsync is enabled for atomic writes."""
    value = os.environ.get("DEVTOOLBOX_IO_FSYNC", "strict").strip().lower()
    return value not in ("0", "false", "no", "off", "relaxed", "skip", "disabled")


def ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _target_mode(path: str) -> int:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


def write_text_atomic(path: str, text: str) -> int:
    """Write UTF-8 text through a temp file and replace; return bytes written.

    The temp file is a uniquely named hidden sibling, so it never collides
    with a user document. Newlines are written exactly as given and an
    existing file keeps its permission bits.
    """
    ensure_parent_dir(path)
    payload = (text or "").encode("utf-8")
    fd, tmp_path = tempfile.mkstemp(
        dir=os.path.dirname(path) or ".",
        prefix=f".{os.path.basename(path)}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            os.chmod(tmp_path, _target_mode(path))
            handle.write(payload)
            handle.flush()
            if _fsync_enabled():
                os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return len(payload)


def write_json_atomic(path: str, data: Dict[str, Any]) -> None:
    payload = json.dumps(data, ensure_ascii=False, indent=2)
    write_text_atomic(path, payload + "\n")


def read_text(path: str) -> str:
    """Read a file as UTF-8, replacing undecodable bytes."""
    with open(path, "rb") as handle:
        data = handle.read()
    return data.decode("utf-8", errors="replace")


def read_json(path: str) -> Optional[Dict[str, Any]]:
    """Read a JSON object; None when the file does not exist.

    Raises ValueError for content that is not a JSON object.
    """
    if not os.path.isfile(path):
        return None
    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object in {path}")
    return data
