"""
Shell command-line scanning.

A heuristic, not a shell parser: quoted regions are blanked out, the rest is
split into simple commands at `;`, `&`, `|` and newlines, and each simple
command into whitespace-separated words. Heredocs, command substitution,
subshells and nested quoting are not understood.

Usage:
    from command_gate.hook_utils.shell import command_words

    command_words('cd /tmp && git commit -m "git push later"')
    # [['cd', '/tmp'], ['git', 'commit', '-m', '""']]
"""
import re

# Stands in for a quoted region that is a whole word by itself; never equal
# to a real command word. Quotes glued to other characters leave nothing.
QUOTE_PLACEHOLDER = '""'

SEPARATORS = frozenset(";&|\n")

# Order matters: `&>` redirection before the bare `&` separator, and `>&` / `<&`
# redirections are swallowed into the surrounding word.
_TOKEN_RE = re.compile(r"&>>?|[;&|\n]|(?:[<>]&|[^\s;&|])+")

_ASSIGNMENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*=")


def _end_of_double_quoted(text: str, start: int) -> int:
    """Index just past the closing double quote, or len(text) if unterminated."""
    i = start
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
        elif ch == '"':
            return i + 1
        else:
            i += 1
    return len(text)


def _is_word_char(ch: str) -> bool:
    return bool(ch) and not ch.isspace() and ch not in SEPARATORS


def neutralize_quotes(command: str) -> str:
    """Remove the contents of every quoted region.

    A quoted region standing alone as a word becomes QUOTE_PLACEHOLDER; one
    glued to other characters leaves nothing, so `git pu''sh` reads as
    `git push`. An unterminated quote runs to the end of the input. Outside
    quotes a backslash makes the next character literal: escaped whitespace
    or separators become the placeholder, an escaped newline is a line
    continuation, anything else is kept as is.
    """
    out = []
    i = 0
    n = len(command)
    while i < n:
        ch = command[i]
        if ch in "'\"":
            if ch == "'":
                end = command.find("'", i + 1)
                end = n if end == -1 else end + 1
            else:
                end = _end_of_double_quoted(command, i + 1)
            previous = out[-1][-1] if out else ""
            if not (_is_word_char(previous) or _is_word_char(command[end:end + 1])):
                out.append(QUOTE_PLACEHOLDER)
            i = end
        elif ch == "\\":
            escaped = command[i + 1:i + 2]
            if escaped == "\n":
                out.append(" ")
            elif escaped.isspace() or escaped in SEPARATORS:
                out.append(QUOTE_PLACEHOLDER)
            elif escaped:
                out.append(escaped)
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def split_commands(text: str) -> list[list[str]]:
    """Split already-neutralized text into simple commands (lists of words).

    Empty commands (`&&`, `;;`, trailing `;`) are dropped.
    """
    commands = []
    current = []
    for match in _TOKEN_RE.finditer(text):
        token = match.group()
        if token in SEPARATORS:
            if current:
                commands.append(current)
                current = []
        else:
            current.append(token)
    if current:
        commands.append(current)
    return commands


def strip_assignments(words: list[str]) -> list[str]:
    """Drop leading NAME=value environment assignments."""
    i = 0
    while i < len(words) and _ASSIGNMENT_RE.match(words[i]):
        i += 1
    return words[i:]


def command_words(command: str) -> list[list[str]]:
    """Words of each simple command in command, in order.

    The first word of every list sits at a command boundary.
    """
    result = []
    for words in split_commands(neutralize_quotes(command)):
        words = strip_assignments(words)
        if words:
            result.append(words)
    return result
