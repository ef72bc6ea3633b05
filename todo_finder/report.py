"""
Report display functions for todo-finder.

Renders found todos as a Markdown table suitable for posting as a pull
request comment.
"""

from todo_finder.config import RepoContext
from todo_finder.matcher import TodoRecord

HEADING = "## 👋 **HEADS UP**: There are still todos found:"
TABLE_HEADER = (
    "| User      | Message   | Link        |\n"
    "| :-------- | :-------- | :---------- |"
)
FOOTER = "<sub>🤖 Todo Finder ✨</sub>"


def format_link(todo: TodoRecord, context: RepoContext | None = None) -> str:
    """
    Format a link to the line a todo was found on.

    Args:
        todo: The todo to link to
        context: Repository coordinates, or None when they are unknown

    Returns:
        GitHub blob URL when context is available, otherwise path:line:char
    """
    if context is None:
        return todo.source_ref
    return context.blob_url(todo.path, todo.line)


def escape_cell(text: str) -> str:
    """Escape text so it stays inside one Markdown table cell."""
    # Lines are split on \n and \r\n already; a lone \r would still end the row
    return text.replace("\r", " ").replace("|", "\\|")


def format_row(todo: TodoRecord, context: RepoContext | None = None) -> str:
    """Format one table row for a todo."""
    user = f"@{escape_cell(todo.assignee)}" if todo.assignee else ""
    message = escape_cell(todo.message)
    link = format_link(todo, context)
    return f"| {user} | _{message}_ | [Open]({link}) |"


def format_report(todos: list[TodoRecord], context: RepoContext | None = None) -> str | None:
    """
    Format the full Markdown report.

    Args:
        todos: Todos in discovery order
        context: Repository coordinates, or None when they are unknown

    Returns:
        Report text, or None if there are no todos
    """
    if not todos:
        return None

    rows = [format_row(todo, context) for todo in todos]
    return "\n".join([HEADING, TABLE_HEADER, *rows, "", FOOTER])


def display_report(todos: list[TodoRecord], context: RepoContext | None = None) -> bool:
    """
    Print the report to the console.

    Prints nothing when there are no todos.

    Returns:
        True if a report was printed
    """
    report = format_report(todos, context)
    if report is None:
        return False

    print(report)
    return True
