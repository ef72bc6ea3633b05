"""
Configuration management for todo-finder.

Loads repository and branch information from environment variables, which
GitHub Actions sets for pull request workflows.
"""

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

GITHUB_REPOSITORY = os.getenv("GITHUB_REPOSITORY")
GITHUB_HEAD_REF = os.getenv("GITHUB_HEAD_REF")
GITHUB_SERVER_URL = os.getenv("GITHUB_SERVER_URL")

DEFAULT_SERVER_URL = "https://github.com"

# Paths containing any of these substrings are never scanned
IGNORED_PATHS = (".github", ".git")


@dataclass(frozen=True)
class RepoContext:
    """Repository coordinates used to build links to scanned files."""

    owner: str
    repo: str
    branch: str
    server_url: str = DEFAULT_SERVER_URL

    @property
    def scheme(self) -> str:
        """Return the scheme of the server URL, https when it has none."""
        return urlparse(self.server_url).scheme or "https"

    @property
    def host(self) -> str:
        """Return the host part of the server URL."""
        return urlparse(self.server_url).netloc or self.server_url.strip("/")

    def blob_url(self, path: str, line: int) -> str:
        """Return the web URL of a line in a file on the configured branch."""
        return f"{self.scheme}://{self.host}/{self.owner}/{self.repo}/blob/{self.branch}/{path}#L{line}"


def parse_repository(full_name: str | None) -> tuple[str, str] | None:
    """
    Split an "owner/repo" identifier.

    Args:
        full_name: Repository identifier, e.g. "acme/widgets"

    Returns:
        (owner, repo) tuple, or None if the identifier is missing or malformed
    """
    if not full_name:
        return None

    parts = full_name.split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None

    return parts[0], parts[1]


def load_repo_context(
    repository: str | None = None,
    branch: str | None = None,
    server_url: str | None = None,
) -> RepoContext | None:
    """
    Build the repository context from explicit values or the environment.

    Missing or malformed values never raise; the caller falls back to plain
    path:line:column references instead of links.

    Args:
        repository: "owner/repo" identifier. Uses GITHUB_REPOSITORY if not provided.
        branch: Branch name. Uses GITHUB_HEAD_REF if not provided.
        server_url: Server base URL. Uses GITHUB_SERVER_URL if not provided.

    Returns:
        RepoContext, or None if owner, repo or branch is unknown
    """
    if repository is None:
        repository = GITHUB_REPOSITORY
    if branch is None:
        branch = GITHUB_HEAD_REF
    if server_url is None:
        server_url = GITHUB_SERVER_URL or DEFAULT_SERVER_URL

    parsed = parse_repository(repository)
    if parsed is None or not branch:
        return None

    owner, repo = parsed
    return RepoContext(owner=owner, repo=repo, branch=branch, server_url=server_url)
