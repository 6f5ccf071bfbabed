"""
Pytest configuration for command gate tests.

Points the data directory (logs, hook-config.json) at a throwaway directory
before the package is imported, and adds the repository root to sys.path.
"""
import io
import os
import sys
import tempfile
from pathlib import Path

import pytest

os.environ["COMMAND_GATE_DATA_DIR"] = tempfile.mkdtemp(prefix="command-gate-tests-")
os.environ.pop("COMMAND_GATE_FAIL_OPEN", None)

repo_root = Path(__file__).parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def stdin_bytes(monkeypatch):
    """Replace stdin with the given bytes."""
    def _set(data: bytes):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    return _set


@pytest.fixture
def hook_config():
    """Write hook-config.json for the duration of a test."""
    from command_gate.config import STATE_FILES
    from command_gate.hook_utils import clear_hook_disabled_cache

    path = STATE_FILES["hook_config"]

    def _write(text: str):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        clear_hook_disabled_cache()
        return path

    yield _write
    path.unlink(missing_ok=True)
    clear_hook_disabled_cache()
