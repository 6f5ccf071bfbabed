"""
Centralized configuration for the command gate.

All configurable constants in one place for easy tuning.
Modules import from here for consistency.

Categories:
- Paths: Data directory and file locations
- Timeouts: TTLs for cached lookups
- Policy: Exit codes and read-failure behaviour
- Blocked Commands: The forbidden command rules
- JSON: msgspec-backed decode/encode helpers
"""
import os
from dataclasses import dataclass
from pathlib import Path

import msgspec

# =============================================================================
# Paths
# =============================================================================

DATA_DIR = Path(
    os.environ.get("COMMAND_GATE_DATA_DIR")
    or os.environ.get("CLAUDE_DATA_DIR")
    or Path.home() / ".claude" / "data"
)

STATE_FILES = {
    "hook_config": DATA_DIR / "hook-config.json",
    "gate_events": DATA_DIR / "command-gate-events.jsonl",
}

LOG_LEVEL = os.environ.get("COMMAND_GATE_LOG_LEVEL", "INFO").upper()


# =============================================================================
# Timeouts (seconds)
# =============================================================================

class Timeouts:
    """TTL settings."""
    HOOK_DISABLED_TTL = 10.0  # hook-config.json lookups


# =============================================================================
# Policy
# =============================================================================

def _env_flag(name: str) -> bool:
    return os.environ.get(name, "0").strip().lower() in ("1", "true", "on", "yes")


class Policy:
    """Process protocol and failure policy."""
    ALLOW_EXIT_CODE = 0
    BLOCK_EXIT_CODE = 2  # PreToolUse: exit 2 blocks the call, stderr goes back to the model

    # Unreadable hook input blocks unless explicitly switched to fail-open
    FAIL_OPEN = _env_flag("COMMAND_GATE_FAIL_OPEN")
    PARSE_FAILURE_REASON = "Unable to parse command from hook input; refusing to run it."

    # Truncation for command text in log records
    LOG_COMMAND_CHARS = 100


# =============================================================================
# Blocked Commands
# =============================================================================

@dataclass(frozen=True)
class Rule:
    """A forbidden command: token sequence plus the message shown on block."""
    name: str
    pattern: tuple[str, ...]
    message: str

    def __post_init__(self):
        if not self.pattern:
            raise ValueError(f"rule {self.name!r} has an empty pattern")


class BlockedCommands:
    """Forbidden command rules (built on first access).

    Order matters: when several rules match, the first one wins.
    """
    # (name, tokens, message)
    RULES_RAW = [
        (
            "git-push",
            ("git", "push"),
            "git push is blocked. Push manually after reviewing changes.",
        ),
        (
            "npm",
            ("npm",),
            "npm is blocked. Use pnpm for JS/TS instead.",
        ),
    ]

    _rules = None

    @classmethod
    def get_rules(cls) -> tuple[Rule, ...]:
        if cls._rules is None:
            cls._rules = tuple(
                Rule(name, tuple(tokens), message)
                for name, tokens, message in cls.RULES_RAW
            )
        return cls._rules

    @classmethod
    def names(cls) -> list[str]:
        return [rule.name for rule in cls.get_rules()]

    @classmethod
    def select(cls, names) -> tuple[Rule, ...]:
        """Rules with the given names, in declaration order.

        Raises:
            KeyError: if a name does not refer to a known rule
        """
        wanted = set(names)
        unknown = wanted - set(cls.names())
        if unknown:
            raise KeyError(", ".join(sorted(unknown)))
        return tuple(rule for rule in cls.get_rules() if rule.name in wanted)


# =============================================================================
# JSON
# =============================================================================

_json_decoder = msgspec.json.Decoder()
_json_encoder = msgspec.json.Encoder()


def fast_json_loads(data: bytes | str):
    """Decode JSON with msgspec (raises msgspec.DecodeError on bad input)."""
    return _json_decoder.decode(data)


def fast_json_dumps(obj) -> bytes:
    """Encode JSON with msgspec."""
    return _json_encoder.encode(obj)
