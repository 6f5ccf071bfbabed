"""
Hook enable/disable configuration.

Uses cache abstraction for automatic expiration.
"""
from command_gate.config import STATE_FILES, Timeouts

from .cache import create_ttl_cache
from .io import safe_load_json

HOOK_DISABLED_TTL = Timeouts.HOOK_DISABLED_TTL

# TTL cache for hook disabled status (single-threaded access pattern)
_hook_disabled_cache = create_ttl_cache(maxsize=50, ttl=HOOK_DISABLED_TTL)


def is_hook_disabled(name: str) -> bool:
    """
    Check if hook is listed in the "disabled" array of hook-config.json.

    Note: Results are cached for HOOK_DISABLED_TTL seconds to avoid repeated file I/O.
    """
    if name in _hook_disabled_cache:
        return _hook_disabled_cache[name]

    config = safe_load_json(STATE_FILES["hook_config"])
    disabled = config.get("disabled", [])
    result = isinstance(disabled, list) and name in disabled
    _hook_disabled_cache[name] = result
    return result


def clear_hook_disabled_cache() -> None:
    """Forget cached lookups (after editing hook-config.json)."""
    _hook_disabled_cache.clear()
