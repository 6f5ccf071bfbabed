"""
Hook SDK - Typed abstractions over the PreToolUse hook payload.

Provides:
- Typed context dataclasses (ToolInput, BaseContext, PreToolUseContext)
- Response builders (allow, deny)
- BlockingHook base class for handlers that can deny a tool call
- dispatch_handler decorator for raw-dict handlers

Usage:
    from command_gate.hook_sdk import PreToolUseContext, dispatch_handler, Response

    @dispatch_handler("my_hook")
    def handle(ctx: PreToolUseContext) -> dict | None:
        if ctx.is_bash and "sudo" in ctx.tool_input.command:
            return Response.deny("Not allowed")
        return None
"""
from dataclasses import dataclass, field
from functools import wraps
from pathlib import Path
from typing import Any, Callable

from command_gate.hook_utils import log_event


# =============================================================================
# Context Dataclasses
# =============================================================================

@dataclass
class ToolInput:
    """Parsed tool input with typed accessors."""
    raw: dict = field(default_factory=dict)

    @property
    def command(self) -> str:
        """Bash command text.

        Raises:
            ValueError: the command field is present but not a string
        """
        command = self.raw.get("command")
        if command is None:
            return ""
        if not isinstance(command, str):
            raise ValueError(f"tool_input.command must be a string, got {type(command).__name__}")
        return command

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)


@dataclass
class BaseContext:
    """Base context with common fields."""
    raw: dict = field(default_factory=dict)

    @property
    def session_id(self) -> str:
        return self.raw.get("session_id") or "default"

    @property
    def cwd(self) -> str:
        return self.raw.get("cwd", str(Path.cwd()))

    @property
    def hook_event_name(self) -> str:
        return self.raw.get("hook_event_name", "PreToolUse")

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)


@dataclass
class PreToolUseContext(BaseContext):
    """Context for PreToolUse hooks."""

    @property
    def tool_name(self) -> str:
        """Tool name, "" when missing or null.

        Raises:
            ValueError: tool_name is present but not a string
        """
        tool_name = self.raw.get("tool_name")
        if tool_name is None:
            return ""
        if not isinstance(tool_name, str):
            raise ValueError(f"tool_name must be a string, got {type(tool_name).__name__}")
        return tool_name

    @property
    def tool_input(self) -> ToolInput:
        """Tool input.

        Raises:
            ValueError: tool_input is present but not an object
        """
        tool_input = self.raw.get("tool_input")
        if tool_input is None:
            return ToolInput()
        if not isinstance(tool_input, dict):
            raise ValueError(f"tool_input must be an object, got {type(tool_input).__name__}")
        return ToolInput(tool_input)

    @property
    def is_bash(self) -> bool:
        # Payloads without a tool name are treated as Bash
        return self.tool_name in ("", "Bash")


# =============================================================================
# Response Builders
# =============================================================================

class Response:
    """Response builders for hook output."""

    @staticmethod
    def allow(reason: str = "") -> dict:
        """Allow the tool to proceed (PreToolUse)."""
        return {
            "hookSpecificOutput": {
                "hookEventName": "PreToolUse",
                "permissionDecision": "allow",
                "permissionDecisionReason": reason or "Allowed by hook"
            }
        }

    @staticmethod
    def deny(reason: str) -> dict:
        """Block the tool from proceeding (PreToolUse)."""
        return {
            "hookSpecificOutput": {
                "hookEventName": "PreToolUse",
                "permissionDecision": "deny",
                "permissionDecisionReason": reason
            }
        }


# =============================================================================
# BlockingHook - Base Class for PreToolUse Denials
# =============================================================================

class BlockingHook:
    """Base for PreToolUse hooks that can deny operations.

    Subclasses implement check() which returns deny response or None to allow.

    Example:
        class SudoBlocker(BlockingHook):
            def check(self, ctx: PreToolUseContext) -> dict | None:
                if ctx.tool_input.command.startswith("sudo "):
                    return self.deny("sudo is not allowed")
                return None

        blocker = SudoBlocker("sudo_blocker")
        result = blocker(ctx)  # Returns deny response or None
    """

    def __init__(self, name: str):
        """Initialize blocking hook.

        Args:
            name: Hook identifier for logging
        """
        self.name = name

    def check(self, ctx: PreToolUseContext) -> dict | None:
        """Check if operation should be blocked.

        Override this method in subclasses.

        Returns:
            Deny response dict if blocked, None to allow
        """
        raise NotImplementedError("Subclasses must implement check()")

    def deny(self, reason: str) -> dict:
        """Build deny response."""
        return Response.deny(reason)

    def __call__(self, ctx: PreToolUseContext) -> dict | None:
        return self.check(ctx)


# =============================================================================
# Handler Decorators
# =============================================================================

def dispatch_handler(name: str):
    """
    Decorator for handlers called with the raw payload dict.

    Wraps the payload in a PreToolUseContext. Handler exceptions are logged
    and turn into None (no opinion).

    Usage:
        @dispatch_handler("command_blocker")
        def check(ctx: PreToolUseContext) -> dict | None:
            ...
    """
    def decorator(func: Callable[[PreToolUseContext], dict | None]):
        @wraps(func)
        def wrapper(raw: dict) -> dict | None:
            try:
                return func(PreToolUseContext(raw))
            except Exception as e:
                log_event(name, "error", {"error": str(e)}, "error")
                return None

        return wrapper
    return decorator


__all__ = [
    # Context classes
    "ToolInput",
    "BaseContext",
    "PreToolUseContext",
    # Response builders
    "Response",
    # Base classes
    "BlockingHook",
    # Decorators
    "dispatch_handler",
    # Re-exports from hook_utils (commonly used)
    "log_event",
]
