"""
Logging and graceful degradation utilities.

Uses loguru for structured JSON logging with automatic rotation.
"""
import sys
from functools import wraps
from typing import Callable

from loguru import logger

from command_gate.config import DATA_DIR, LOG_LEVEL, STATE_FILES

LOG_FILE = STATE_FILES["gate_events"]


def ensure_data_dir() -> bool:
    """Create the data directory if needed. Returns False when it can't be created."""
    try:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return True
    except OSError:
        return False


def _add_file_sink(level: str) -> int:
    return logger.add(
        LOG_FILE,
        level=level,
        format="{message}",
        serialize=True,  # JSON output
        rotation="10 MB",
        retention=3,
        compression="gz",
        catch=True,  # Never raise
    )


# Configure loguru: JSON format, 10MB rotation, keep 3 files
# Remove default stderr handler so stderr carries only block reasons
logger.remove()
if ensure_data_dir():
    try:
        _add_file_sink(LOG_LEVEL)
    except ValueError:  # unknown level name
        _add_file_sink("INFO")


def log_event(hook_name: str, event_type: str, data: dict = None, level: str = "info"):
    """
    Log structured event using loguru.

    Args:
        hook_name: Name of the hook (e.g., "command_gate")
        event_type: Event type (e.g., "blocked", "parse_error")
        data: Additional context data
        level: Log level (debug, info, warning, error)
    """
    try:
        log_func = getattr(logger, level, logger.info)
        log_func(event_type, hook=hook_name, **(data or {}))
    except Exception:
        pass  # Never raise


def graceful_main(hook_name: str, check_disabled: bool = True, error_exit: Callable[[], int] = None):
    """
    Decorator for hook main functions.

    Logs unexpected errors instead of surfacing a traceback. The exit status
    after an error comes from error_exit (default: 0, let the call proceed).

    Args:
        hook_name: Name of the hook for logging and disable checks
        check_disabled: If True, exit 0 when the hook is disabled in hook-config.json
        error_exit: Callable returning the exit status to use after an error

    Usage:
        @graceful_main("my_hook")
        def main():
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                if check_disabled:
                    from .hooks import is_hook_disabled
                    if is_hook_disabled(hook_name):
                        log_event(hook_name, "skipped", {"reason": "disabled"}, "debug")
                        sys.exit(0)
                return func(*args, **kwargs)
            except Exception as e:
                log_event(hook_name, "error", {"type": type(e).__name__, "msg": str(e)}, "error")
                sys.exit(error_exit() if error_exit else 0)
        return wrapper
    return decorator
