"""Import-order regression tests."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


@pytest.mark.parametrize(
    "statement",
    [
        "from devtoolbox.services.workspace_store import WorkspaceStore",
        "from devtoolbox.bootstrap import bootstrap",
        "from devtoolbox.api.main import app",
    ],
)
def test_module_imports_in_clean_interpreter(statement):
    """Each entry point imports on its own, without relying on earlier imports."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    process = subprocess.run(
        [sys.executable, "-c", f"{statement}; print('ok')"],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )
    assert process.returncode == 0, process.stderr
    assert "ok" in process.stdout
