"""
Command-line entry points for the command gate.

Hook usage (settings.json, PreToolUse matcher "Bash"):
    command-gate                  # all rules
    command-gate --rule npm       # only the npm rule
    block-git-push                # same as --rule git-push
    block-npm                     # same as --rule npm

Manual check:
    command-gate --command "cd /tmp && git push"

Exit status 0 lets the call proceed. Exit status 2 blocks it and the
reason on stderr is shown to the model. With --json a deny document is
printed on stdout instead and the exit status is always 0.
"""
import argparse
import sys

from command_gate.config import BlockedCommands, Policy, fast_json_dumps
from command_gate.handlers.command_blocker import (
    HOOK_NAME,
    Decision,
    decide,
    evaluate,
    parse_failure,
)
from command_gate.hook_sdk import PreToolUseContext, Response
from command_gate.hook_utils import graceful_main, log_event, read_stdin_payload


def build_parser(prog: str = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Block forbidden shell commands proposed by a coding assistant.",
    )
    parser.add_argument(
        "--rule",
        action="append",
        choices=BlockedCommands.names(),
        metavar="NAME",
        help=f"only apply this rule (repeatable; one of: {', '.join(BlockedCommands.names())})",
    )
    parser.add_argument(
        "--command",
        help="check this command line instead of reading a hook payload from stdin",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print a hookSpecificOutput deny document instead of exiting with status 2",
    )
    return parser


def emit(decision: Decision, as_json: bool = False) -> int:
    """Write the decision out and return the exit status."""
    if not decision.blocked:
        return Policy.ALLOW_EXIT_CODE
    if as_json:
        print(fast_json_dumps(Response.deny(decision.reason)).decode())
        return Policy.ALLOW_EXIT_CODE
    print(decision.reason, file=sys.stderr)
    return Policy.BLOCK_EXIT_CODE


def _error_exit() -> int:
    # Unexpected failure: apply the same policy as unreadable input
    return emit(parse_failure())


@graceful_main(HOOK_NAME, error_exit=_error_exit)
def main(argv: list[str] = None, rule_names: list[str] = None, prog: str = None) -> None:
    args = build_parser(prog).parse_args(argv)
    rules = BlockedCommands.select(args.rule or rule_names or BlockedCommands.names())

    if args.command is not None:
        decision = decide(args.command, rules)
    else:
        try:
            payload = read_stdin_payload()
        except ValueError as e:
            log_event(HOOK_NAME, "parse_error", {"msg": str(e), "fail_open": Policy.FAIL_OPEN}, "warning")
            decision = parse_failure()
        else:
            decision = evaluate(PreToolUseContext(payload), rules)

    sys.exit(emit(decision, args.json))


def block_git_push() -> None:
    main(rule_names=["git-push"], prog="block-git-push")


def block_npm() -> None:
    main(rule_names=["npm"], prog="block-npm")
