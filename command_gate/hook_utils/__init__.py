"""
Hook utilities package - shared utilities for the command gate.

Usage:
    from command_gate.hook_utils import log_event, graceful_main, command_words
    # or
    from command_gate.hook_utils.logging import log_event
    from command_gate.hook_utils.shell import neutralize_quotes
"""

from .logging import (
    LOG_FILE,
    ensure_data_dir,
    log_event,
    graceful_main,
)

from .io import (
    safe_load_json,
    read_stdin_payload,
)

from .cache import (
    create_ttl_cache,
)

from .hooks import (
    HOOK_DISABLED_TTL,
    is_hook_disabled,
    clear_hook_disabled_cache,
)

from .shell import (
    QUOTE_PLACEHOLDER,
    SEPARATORS,
    neutralize_quotes,
    split_commands,
    strip_assignments,
    command_words,
)


__all__ = [
    # Logging
    "LOG_FILE",
    "ensure_data_dir",
    "log_event",
    "graceful_main",
    # I/O
    "safe_load_json",
    "read_stdin_payload",
    # Cache
    "create_ttl_cache",
    # Hooks
    "HOOK_DISABLED_TTL",
    "is_hook_disabled",
    "clear_hook_disabled_cache",
    # Shell scanning
    "QUOTE_PLACEHOLDER",
    "SEPARATORS",
    "neutralize_quotes",
    "split_commands",
    "strip_assignments",
    "command_words",
]
