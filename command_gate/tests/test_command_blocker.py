"""Tests for command_blocker module."""
import pytest

from command_gate.config import BlockedCommands, Policy, Rule
from command_gate.handlers.command_blocker import (
    CommandBlockerHook,
    Decision,
    check_blocked_command,
    decide,
    evaluate,
    parse_failure,
)
from command_gate.hook_sdk import PreToolUseContext

GIT_PUSH_MESSAGE = "git push is blocked. Push manually after reviewing changes."
NPM_MESSAGE = "npm is blocked. Use pnpm for JS/TS instead."


def bash(command) -> PreToolUseContext:
    return PreToolUseContext({"tool_name": "Bash", "tool_input": {"command": command}})


class TestDecide:
    """Tests for the allow/block decision."""

    def test_block_git_push(self):
        """Should block git push."""
        decision = decide("git push")
        assert decision.blocked
        assert decision.reason == GIT_PUSH_MESSAGE
        assert decision.rule == "git-push"

    def test_block_git_push_with_args(self):
        """Should block git push with a remote and branch."""
        assert decide("git push origin main").blocked

    def test_block_git_push_after_and(self):
        """Should block git push later in a chain."""
        assert decide("cd /tmp && git push").blocked

    def test_allow_quoted_git_push(self):
        """Should ignore git push inside a commit message."""
        assert decide('git commit -m "please git push later"') == Decision.allow()

    def test_block_npm(self):
        """Should block npm install."""
        decision = decide("npm install left-pad")
        assert decision.blocked
        assert decision.reason == NPM_MESSAGE

    def test_allow_pnpm(self):
        """Should allow pnpm."""
        assert not decide("pnpm install left-pad").blocked

    @pytest.mark.parametrize("command", ["", "   ", None])
    def test_empty_command(self, command):
        """Should allow empty command."""
        assert decide(command) == Decision.allow()

    def test_idempotent(self):
        """Same command, same decision."""
        command = "cd x; git push --force"
        assert decide(command) == decide(command)

    @pytest.mark.parametrize("command", [
        "git pushup",
        "echo npmsomething",
        "echo git push",
        "git status",
        "git log --oneline | grep push",
    ])
    def test_allow_non_boundary_or_inexact(self, command):
        """Tokens must match exactly at a command boundary."""
        assert not decide(command).blocked

    @pytest.mark.parametrize("command", ["Git push", "NPM install", "git PUSH"])
    def test_case_sensitive(self, command):
        """Matching is case-sensitive."""
        assert not decide(command).blocked

    @pytest.mark.parametrize("command", [
        "cd x; git push",
        "ls | npm ci",
        "true || npm ci",
        "sleep 1 & npm start",
        "x;npm",
        "git status\ngit push",
        "git  \t push",
        "CI=1 npm test",
    ])
    def test_block_at_boundaries(self, command):
        """Separators, newlines and env prefixes start a new command."""
        assert decide(command).blocked

    @pytest.mark.parametrize("command", [
        "echo 'unterminated git push",
        'echo "oops; npm install',
        "echo 'a' 'b; npm i'",
    ])
    def test_unterminated_or_quoted_tail(self, command):
        """Quoted or unterminated text is never executable."""
        assert not decide(command).blocked

    @pytest.mark.parametrize("command", [
        "git pu''sh",
        'git push""',
        "n''pm install",
        'np""m i',
        "git ''push",
    ])
    def test_empty_quotes_glued_to_word(self, command):
        """Empty quotes inside a word don't hide the command."""
        assert decide(command).blocked

    def test_quoted_command_word(self):
        """A quoted word in command position is not matched."""
        assert not decide('"git" push').blocked

    def test_first_rule_wins(self):
        """Declaration order decides between several matches."""
        decision = decide("npm i && git push")
        assert decision.rule == "git-push"

    def test_custom_rule_order(self):
        """Explicit rule order is respected."""
        rules = BlockedCommands.select(["npm", "git-push"])
        reordered = tuple(reversed(rules))
        assert decide("npm i && git push", reordered).rule == "npm"

    def test_custom_rule(self):
        """Any token sequence can be a rule."""
        rule = Rule("docker-prune", ("docker", "system", "prune"), "no pruning")
        assert decide("docker system prune -af", (rule,)).reason == "no pruning"
        assert not decide("docker system df", (rule,)).blocked

    def test_no_rules(self):
        """An empty rule set allows everything."""
        assert not decide("git push", ()).blocked


class TestParseFailure:
    """Tests for the unreadable-input policy."""

    def test_fail_closed_by_default(self, monkeypatch):
        """Should block when input can't be read."""
        monkeypatch.setattr(Policy, "FAIL_OPEN", False)
        decision = parse_failure()
        assert decision.blocked
        assert decision.reason == Policy.PARSE_FAILURE_REASON

    def test_fail_open(self, monkeypatch):
        """Should allow when switched to fail-open."""
        monkeypatch.setattr(Policy, "FAIL_OPEN", True)
        assert parse_failure() == Decision.allow()


class TestEvaluate:
    """Tests for payload evaluation."""

    def test_block_bash(self):
        """Should block a Bash payload running git push."""
        assert evaluate(bash("git push")).blocked

    def test_allow_other_tools(self):
        """Should ignore non-Bash tools."""
        ctx = PreToolUseContext({"tool_name": "Read", "tool_input": {"command": "git push"}})
        assert not evaluate(ctx).blocked

    def test_missing_tool_name_treated_as_bash(self):
        """Payloads without tool_name are checked."""
        assert evaluate(PreToolUseContext({"tool_input": {"command": "npm i"}})).blocked

    def test_missing_command(self):
        """A Bash payload without a command is allowed."""
        assert not evaluate(PreToolUseContext({"tool_name": "Bash", "tool_input": {}})).blocked

    def test_non_string_command_fails_closed(self, monkeypatch):
        """Malformed command field falls under the parse-failure policy."""
        monkeypatch.setattr(Policy, "FAIL_OPEN", False)
        decision = evaluate(bash(42))
        assert decision.reason == Policy.PARSE_FAILURE_REASON

    def test_non_object_tool_input_fails_closed(self, monkeypatch):
        """tool_input must be an object."""
        monkeypatch.setattr(Policy, "FAIL_OPEN", False)
        ctx = PreToolUseContext({"tool_name": "Bash", "tool_input": "git push"})
        assert evaluate(ctx).blocked

    def test_non_string_command_fail_open(self, monkeypatch):
        """Fail-open lets malformed payloads through."""
        monkeypatch.setattr(Policy, "FAIL_OPEN", True)
        assert not evaluate(bash(["git", "push"])).blocked

    def test_null_tool_name_treated_as_bash(self):
        """A null tool_name is checked like a missing one."""
        ctx = PreToolUseContext({"tool_name": None, "tool_input": {"command": "git push"}})
        assert evaluate(ctx).blocked

    def test_non_string_tool_name_fails_closed(self, monkeypatch):
        """A non-string tool_name falls under the parse-failure policy."""
        monkeypatch.setattr(Policy, "FAIL_OPEN", False)
        ctx = PreToolUseContext({"tool_name": ["Bash"], "tool_input": {"command": "ls"}})
        assert evaluate(ctx).reason == Policy.PARSE_FAILURE_REASON

    def test_rule_subset(self):
        """Only the given rules apply."""
        rules = BlockedCommands.select(["npm"])
        assert not evaluate(bash("git push"), rules).blocked
        assert evaluate(bash("npm ci"), rules).blocked


class TestCommandBlockerHook:
    """Tests for the hook class and dispatcher handler."""

    def test_deny_response(self):
        """Blocked commands produce a deny response."""
        result = CommandBlockerHook()(bash("git push"))
        output = result["hookSpecificOutput"]
        assert output["permissionDecision"] == "deny"
        assert output["permissionDecisionReason"] == GIT_PUSH_MESSAGE

    def test_allow_returns_none(self):
        """Allowed commands produce no response."""
        assert CommandBlockerHook()(bash("git status")) is None

    def test_hook_with_rule_subset(self):
        """Hook honours its own rule set."""
        hook = CommandBlockerHook(rules=BlockedCommands.select(["git-push"]))
        assert hook(bash("npm install")) is None

    def test_dispatch_handler_takes_raw_payload(self):
        """Dispatcher handler accepts the raw payload dict."""
        raw = {"tool_name": "Bash", "tool_input": {"command": "cd a && npm test"}}
        result = check_blocked_command(raw)
        assert result["hookSpecificOutput"]["permissionDecisionReason"] == NPM_MESSAGE

    def test_dispatch_handler_allows_safe(self):
        """Dispatcher handler returns None for safe commands."""
        raw = {"tool_name": "Bash", "tool_input": {"command": "ls -la"}}
        assert check_blocked_command(raw) is None
