"""
todo-finder: Report todo comments left in a project

Entry point for the application.
"""

import sys

from todo_finder.config import load_repo_context
from todo_finder.report import display_report
from todo_finder.walker import ScanError, scan_root


def main() -> int:
    context = load_repo_context()

    try:
        result = scan_root()
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    display_report(result.todos, context)
    return 0


if __name__ == "__main__":
    sys.exit(main())
