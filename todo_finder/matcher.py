"""
Todo comment matcher.

Reads a file, splits it into lines and applies each named matching rule to
every line, producing one TodoRecord per match.
"""

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path

KEYWORD = "Todo"

# Keyword, then either " (assignee)" with an optional colon, a bare " :", or a
# colon glued to the keyword; a single space always precedes the message.
# Matches: Todo: msg, Todo (alice): msg, Todo (alice) msg, Todo : msg, Todo  msg
# A message runs to the end of the line unless whitespace and another marker
# follow it, so "Todo: rename the Todo: field" yields "rename the" and "field".
ASSIGNED_PATTERN = re.compile(rf"({KEYWORD})(?: (?:\((.+?)\))?:?|:) ", re.IGNORECASE)

# Rules match the marker only: group 1 is the keyword, group 2 the assignee.
# They are applied in order; each one runs over every line.
MATCHERS = {
    "assigned": ASSIGNED_PATTERN,
}

LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class TodoRecord:
    """Represents a todo comment found in a file."""

    type: str
    assignee: str | None
    message: str
    path: str
    line: int
    char: int
    matcher: str

    @property
    def source_ref(self) -> str:
        """Return source reference in path:line:char format."""
        return f"{self.path}:{self.line}:{self.char}"


def split_lines(text: str) -> list[str]:
    """Split text on \\n or \\r\\n, keeping the empty entry after a final newline."""
    return LINE_BREAK.split(text)


def relative_path(path: Path, base: Path | None = None) -> str:
    """Return path relative to base (default: working directory), with / separators."""
    if base is None:
        base = Path.cwd()
    return Path(os.path.relpath(path, base)).as_posix()


def _message_end(pattern: re.Pattern, line: str, match: re.Match) -> tuple[int, re.Match | None]:
    """Return where match's message ends and the marker that ends it, if any."""
    # The message needs at least one character before the separating whitespace
    first_gap = match.end() + 1
    following = pattern.search(line, first_gap)

    while following:
        end = following.start()
        while end > first_gap and line[end - 1].isspace():
            end -= 1
        if end < following.start():
            return end, following
        following = pattern.search(line, following.start() + 1)

    return len(line), None


def find_todos(pattern: re.Pattern, line: str) -> list[tuple[re.Match, str]]:
    """
    Find every marker of a rule in one line, with the message that follows it.

    Scanning restarts after each message, so markers are reported left to
    right and never overlap.

    Args:
        pattern: Compiled marker pattern
        line: Text of a single line

    Returns:
        List of (marker match, message) pairs
    """
    found = []
    match = pattern.search(line)

    while match:
        if match.end() == len(line):
            # A marker with nothing after it is not a todo
            match = pattern.search(line, match.start() + 1)
            continue

        end, following = _message_end(pattern, line, match)
        found.append((match, line[match.end():end]))
        match = following

    return found


def scan_text(text: str, path: str, matchers: dict | None = None) -> list[TodoRecord]:
    """
    Scan text for todo comments.

    Args:
        text: File contents
        path: Path recorded on every TodoRecord
        matchers: Mapping of rule name to compiled marker pattern. Uses MATCHERS if not provided.

    Returns:
        List of TodoRecord objects in rule, line, then column order
    """
    if matchers is None:
        matchers = MATCHERS

    lines = split_lines(text)
    todos = []

    for name, pattern in matchers.items():
        for line_number, line in enumerate(lines, start=1):
            for match, message in find_todos(pattern, line):
                todo_type, assignee = match.group(1, 2)
                todos.append(
                    TodoRecord(
                        type=todo_type,
                        assignee=assignee,
                        message=message,
                        path=path,
                        line=line_number,
                        char=match.start() + 1,
                        matcher=name,
                    )
                )

    return todos


def scan_file(path: Path, base: Path | None = None) -> list[TodoRecord]:
    """
    Scan a single file for todo comments.

    Unreadable files are reported on stderr and contribute no records.

    Args:
        path: Path to the file to scan
        base: Directory the recorded path is relative to. Uses the working directory if not provided.

    Returns:
        List of TodoRecord objects found in the file
    """
    rel_path = relative_path(path, base)

    try:
        # newline="" keeps \r\n intact so split_lines sees the original breaks
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        print(f"Unable to read file at `{rel_path}`: `{e.strerror or e}`", file=sys.stderr)
        return []

    return scan_text(content, rel_path)
