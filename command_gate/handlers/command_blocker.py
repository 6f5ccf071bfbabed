"""Block forbidden shell commands before they run.

PreToolUse hook for Bash tool.
A command is blocked when one of its simple commands starts with a
forbidden word sequence (e.g. `git push`, `npm`). Text inside quotes is
ignored, so a commit message mentioning `git push` does not count.

Uses hook_sdk for typed context and response builders.
"""
from dataclasses import dataclass
from typing import Literal

from command_gate.config import BlockedCommands, Policy, Rule
from command_gate.hook_sdk import (
    BlockingHook,
    PreToolUseContext,
    dispatch_handler,
    log_event,
)
from command_gate.hook_utils.shell import command_words

HOOK_NAME = "command_blocker"


@dataclass(frozen=True)
class Decision:
    """Outcome for one command: allow, or block with a reason."""
    action: Literal["allow", "block"]
    reason: str | None = None
    rule: str | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls("allow")

    @classmethod
    def block(cls, reason: str, rule: str | None = None) -> "Decision":
        return cls("block", reason, rule)

    @property
    def blocked(self) -> bool:
        return self.action == "block"


def rule_matches(rule: Rule, commands: list[list[str]]) -> bool:
    """True if any simple command starts with the rule's token sequence."""
    size = len(rule.pattern)
    return any(tuple(words[:size]) == rule.pattern for words in commands)


def decide(command: str | None, rules: tuple[Rule, ...] | None = None) -> Decision:
    """
    Decide whether command may run.

    Args:
        command: The bash command line
        rules: Rules to apply, in priority order (default: all BlockedCommands)

    Returns:
        Decision.block with the first matching rule's message, else Decision.allow
    """
    if rules is None:
        rules = BlockedCommands.get_rules()
    if not command or not command.strip():
        return Decision.allow()

    commands = command_words(command)
    for rule in rules:
        if rule_matches(rule, commands):
            return Decision.block(rule.message, rule.name)
    return Decision.allow()


def parse_failure() -> Decision:
    """Decision for hook input that can't be read."""
    if Policy.FAIL_OPEN:
        return Decision.allow()
    return Decision.block(Policy.PARSE_FAILURE_REASON)


def evaluate(ctx: PreToolUseContext, rules: tuple[Rule, ...] | None = None) -> Decision:
    """Decision for a hook payload. Non-Bash tools are always allowed."""
    try:
        if not ctx.is_bash:
            return Decision.allow()
        command = ctx.tool_input.command
    except ValueError as e:
        log_event(HOOK_NAME, "parse_error", {"msg": str(e), "fail_open": Policy.FAIL_OPEN}, "warning")
        return parse_failure()

    decision = decide(command, rules)
    if decision.blocked:
        log_event(HOOK_NAME, "blocked", {
            "rule": decision.rule,
            "command": command[:Policy.LOG_COMMAND_CHARS],
            "session": ctx.session_id,
        })
    return decision


class CommandBlockerHook(BlockingHook):
    """Deny Bash calls that run a forbidden command."""

    def __init__(self, name: str = HOOK_NAME, rules: tuple[Rule, ...] | None = None):
        super().__init__(name)
        self.rules = rules

    def check(self, ctx: PreToolUseContext) -> dict | None:
        decision = evaluate(ctx, self.rules)
        if decision.blocked:
            return self.deny(decision.reason)
        return None


# Create hook instance for dispatcher
_hook = CommandBlockerHook()


@dispatch_handler(HOOK_NAME)
def check_blocked_command(ctx: PreToolUseContext) -> dict | None:
    """Handler function for dispatcher. Returns deny response or None."""
    return _hook(ctx)
