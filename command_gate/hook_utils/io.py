"""
File and stdin I/O with graceful error handling.
"""
import sys
from pathlib import Path

import msgspec

from command_gate.config import fast_json_loads


def safe_load_json(path: Path, default: dict = None) -> dict:
    """Load a JSON object from path, falling back to default on any read or decode error."""
    if default is None:
        default = {}
    try:
        data = fast_json_loads(path.read_bytes())
    except (FileNotFoundError, msgspec.DecodeError, OSError):
        return default.copy()
    if not isinstance(data, dict):
        from command_gate.hook_utils.logging import log_event
        log_event("safe_load_json", "unexpected_type", {"path": str(path), "type": type(data).__name__})
        return default.copy()
    return data


def read_stdin_payload() -> dict:
    """Read and decode the hook payload from stdin.

    Raises:
        ValueError: stdin is empty, not valid JSON, or not a JSON object
    """
    raw = sys.stdin.buffer.read()
    if not raw.strip():
        raise ValueError("empty hook input")
    try:
        payload = fast_json_loads(raw)
    except msgspec.DecodeError as e:
        raise ValueError(f"invalid JSON hook input: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError(f"hook input must be a JSON object, got {type(payload).__name__}")
    return payload
