"""
Directory walker for todo-finder.

Recursively visits a directory tree in name order, skipping ignored paths,
and scans every regular file with the matcher. Each call returns its own
ScanResult which the caller merges, so results keep discovery order.
"""

import stat
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from todo_finder.config import IGNORED_PATHS
from todo_finder.matcher import TodoRecord, relative_path, scan_file


class ScanError(Exception):
    """Raised when the scan root itself cannot be read."""

    pass


class WalkStatus(Enum):
    """How the walker dealt with a directory or entry."""

    COMPLETE = "complete"
    UNREADABLE_DIRECTORY = "unreadable_directory"
    UNREADABLE_ENTRY = "unreadable_entry"


@dataclass(frozen=True)
class WalkOutcome:
    """Outcome of visiting one path, relative to the scan root."""

    path: str
    status: WalkStatus
    error: str | None = None


@dataclass
class ScanResult:
    """Records and walk outcomes collected under one directory."""

    todos: list[TodoRecord] = field(default_factory=list)
    outcomes: list[WalkOutcome] = field(default_factory=list)

    @property
    def abandoned(self) -> list[WalkOutcome]:
        """Return outcomes for directories and entries that could not be read."""
        return [o for o in self.outcomes if o.status is not WalkStatus.COMPLETE]

    def merge(self, other: "ScanResult") -> "ScanResult":
        """Append another result after this one and return self."""
        self.todos.extend(other.todos)
        self.outcomes.extend(other.outcomes)
        return self


def is_ignored(path: str, ignored_paths=IGNORED_PATHS) -> bool:
    """Return True if any ignored substring occurs in path."""
    return any(ignored in path for ignored in ignored_paths)


def walk_directory(
    directory: Path,
    ignored_paths=IGNORED_PATHS,
    root: Path | None = None,
    base: Path | None = None,
) -> ScanResult:
    """
    Recursively scan a directory for todo comments.

    A directory that cannot be listed is abandoned, and an entry that cannot
    be stat'ed is skipped; both are recorded in ScanResult.outcomes and the
    walk carries on with the remaining entries. Symlinks, devices and other
    special files are not followed or scanned.

    Args:
        directory: Directory to scan
        ignored_paths: Substrings that exclude a path (and its subtree)
        root: Scan root that ignore checks are relative to. Defaults to directory.
        base: Directory recorded paths are relative to. Uses the working directory if not provided.

    Returns:
        ScanResult for this directory and everything below it
    """
    if root is None:
        root = directory

    result = ScanResult()
    dir_ref = relative_path(directory, root)

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        result.outcomes.append(
            WalkOutcome(dir_ref, WalkStatus.UNREADABLE_DIRECTORY, e.strerror or str(e))
        )
        return result

    result.outcomes.append(WalkOutcome(dir_ref, WalkStatus.COMPLETE))

    for entry in entries:
        entry_ref = relative_path(entry, root)
        if is_ignored(entry_ref, ignored_paths):
            continue

        try:
            mode = entry.lstat().st_mode
        except OSError as e:
            result.outcomes.append(
                WalkOutcome(entry_ref, WalkStatus.UNREADABLE_ENTRY, e.strerror or str(e))
            )
            continue

        if stat.S_ISDIR(mode):
            result.merge(walk_directory(entry, ignored_paths, root, base))
        elif stat.S_ISREG(mode):
            result.todos.extend(scan_file(entry, base))

    return result


def scan_root(root: Path | None = None, ignored_paths=IGNORED_PATHS) -> ScanResult:
    """
    Scan a project tree, treating an unreadable root as fatal.

    Args:
        root: Directory to scan. Uses the working directory if not provided.
        ignored_paths: Substrings that exclude a path (and its subtree)

    Returns:
        ScanResult for the whole tree, with paths relative to the working directory

    Raises:
        ScanError: If the root directory cannot be listed
    """
    if root is None:
        root = Path.cwd()

    result = walk_directory(Path(root), ignored_paths)

    root_outcome = result.outcomes[0]
    if root_outcome.status is WalkStatus.UNREADABLE_DIRECTORY:
        raise ScanError(f"unable to scan {root}: {root_outcome.error}")

    return result
