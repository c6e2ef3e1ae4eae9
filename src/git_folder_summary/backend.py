"""Query the local and remote state of a single repository.

All git calls go through GitPython's `Git` command wrapper, with the
repository given as the working directory of each call. The process's own
current directory is never changed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from git import Git
from git.exc import CommandError

logger = logging.getLogger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"
UPSTREAM = "@{u}"
UNPULLED_RANGE = f"HEAD..{UPSTREAM}"
UNPUSHED_RANGE = f"{UPSTREAM}..HEAD"
DEFAULT_FETCH_TIMEOUT = 30.0


class GitBackendError(Exception):
    """A git query for a repository failed."""


class DetachedOrUnreadableBranch(GitBackendError):
    """HEAD is not on a named branch, or could not be read."""


class FetchFailure(GitBackendError):
    """Refreshing the remote-tracking refs failed."""


class BackendInvocationFailure(GitBackendError):
    """A git command could not run or returned an error."""


@dataclass(frozen=True)
class LocalChanges:
    """Presence of each kind of local change in the working tree."""

    has_untracked: bool = False
    has_new_staged: bool = False
    has_modified: bool = False


@dataclass(frozen=True)
class RepoState:
    """The state of one repository, as queried during this run."""

    branch: str = ""
    has_untracked: bool = False
    has_new_staged: bool = False
    has_modified: bool = False
    has_upstream: bool = False
    # commits on the upstream that are not in HEAD
    unpulled_count: int = 0
    # commits in HEAD that are not on the upstream
    unpushed_count: int = 0


class GitBackend(Protocol):
    """The git queries needed to summarize a repository."""

    def resolve_branch(self, path: Path) -> str: ...

    def local_status(self, path: Path) -> LocalChanges: ...

    def has_upstream(self, path: Path) -> bool: ...

    def fetch(self, path: Path) -> None: ...

    def count_commits(self, path: Path, revision_range: str) -> int: ...


def parse_porcelain_status(output: str) -> LocalChanges:
    """Classify `git status --porcelain` output into local change flags."""
    codes = [line[:2] for line in output.splitlines() if len(line) >= 2]
    return LocalChanges(
        has_untracked=any(code == "??" for code in codes),
        has_new_staged=any(code[0] == "A" for code in codes),
        has_modified=any("M" in code for code in codes),
    )


class GitCliBackend:
    """Run the `git` command line tool inside each repository."""

    def __init__(self, fetch_timeout: float | None = DEFAULT_FETCH_TIMEOUT) -> None:
        self.fetch_timeout = fetch_timeout

    def _run(self, path: Path, *args: str, **kwargs: object) -> str:
        try:
            return Git(path).execute(["git", *args], **kwargs)  # type: ignore[call-overload]
        except CommandError as e:
            raise BackendInvocationFailure(
                f"'git {' '.join(args)}' failed in '{path}'"
            ) from e

    def resolve_branch(self, path: Path) -> str:
        """Return the name of the checked-out branch."""
        try:
            ref = self._run(path, "symbolic-ref", "-q", "HEAD")
        except BackendInvocationFailure as e:
            raise DetachedOrUnreadableBranch(
                f"HEAD of '{path}' is detached or unreadable"
            ) from e
        return ref.strip().removeprefix(BRANCH_REF_PREFIX)

    def local_status(self, path: Path) -> LocalChanges:
        """Return which kinds of local changes the working tree has."""
        return parse_porcelain_status(self._run(path, "status", "--porcelain"))

    def has_upstream(self, path: Path) -> bool:
        """Check if the checked-out branch tracks an upstream branch."""
        try:
            self._run(
                path, "rev-parse", "--abbrev-ref", "--symbolic-full-name", UPSTREAM
            )
        except BackendInvocationFailure:
            return False
        return True

    def fetch(self, path: Path) -> None:
        """Quietly refresh the remote-tracking refs, without prompting."""
        try:
            self._run(
                path,
                "fetch",
                "--quiet",
                kill_after_timeout=self.fetch_timeout,
                env={"GIT_TERMINAL_PROMPT": "0"},
            )
        except BackendInvocationFailure as e:
            raise FetchFailure(f"fetch failed in '{path}'") from e

    def count_commits(self, path: Path, revision_range: str) -> int:
        """Count the commits in a revision range."""
        output = self._run(path, "rev-list", "--count", revision_range)
        try:
            return int(output.strip())
        except ValueError as e:
            raise BackendInvocationFailure(
                f"unexpected rev-list output in '{path}': {output!r}"
            ) from e


def query_repository(
    path: Path,
    *,
    skip_fetch: bool,
    backend: GitBackend,
    branch: str | None = None,
) -> RepoState:
    """Return the state of a repository.

    Each query fails on its own: a failed query degrades its own fields to
    empty or false and the others still run. A `branch` resolved earlier in
    the run is reused instead of being resolved again.
    """
    if branch is None:
        branch = resolve_branch(path, backend)

    try:
        changes = backend.local_status(path)
    except GitBackendError as e:
        logger.debug("no local status for %s: %s", path, e)
        changes = LocalChanges()

    try:
        has_upstream = backend.has_upstream(path)
    except GitBackendError as e:
        logger.debug("no upstream check for %s: %s", path, e)
        has_upstream = False

    unpulled = unpushed = 0
    if has_upstream:
        if not skip_fetch:
            try:
                backend.fetch(path)
            except GitBackendError as e:
                logger.debug("using stale remote state for %s: %s", path, e)
        unpulled = _count_commits(path, UNPULLED_RANGE, backend)
        unpushed = _count_commits(path, UNPUSHED_RANGE, backend)

    return RepoState(
        branch=branch,
        has_untracked=changes.has_untracked,
        has_new_staged=changes.has_new_staged,
        has_modified=changes.has_modified,
        has_upstream=has_upstream,
        unpulled_count=unpulled,
        unpushed_count=unpushed,
    )


def resolve_branch(path: Path, backend: GitBackend) -> str:
    """Return the checked-out branch, or "" when there is none."""
    try:
        return backend.resolve_branch(path)
    except GitBackendError as e:
        logger.debug("no branch for %s: %s", path, e)
        return ""


def _count_commits(path: Path, revision_range: str, backend: GitBackend) -> int:
    try:
        return backend.count_commits(path, revision_range)
    except GitBackendError as e:
        logger.debug("can't count %s in %s: %s", revision_range, path, e)
        return 0
