"""
Command gate for Claude Code.

A PreToolUse hook that blocks forbidden shell commands (git push, npm)
before the assistant runs them. Matches inside quoted arguments are ignored.

Subpackages:
- hook_utils: Shared utilities (logging, shell scanning, caching, I/O)
- handlers: Hook handlers (command_blocker)
- tests: Unit tests
"""

__version__ = "0.1.0"
