"""Encode a repository state as a short, fixed-width status code."""

from dataclasses import dataclass
from typing import NamedTuple

from .backend import RepoState

NO_UPSTREAM = "--"
NEUTRAL_LOCAL = "   "
NEUTRAL_REMOTE = "  "
STATUS_WIDTH = len(NEUTRAL_LOCAL) + len(NEUTRAL_REMOTE)


@dataclass(frozen=True)
class StatusCode:
    """A 3-character local segment followed by a 2-character remote segment.

    The local segment has one slot per flag: `?` untracked files, `+` new
    staged files, `M` modified files. The remote segment is `v` for commits
    to pull and `^` for commits to push, or `--` when there is no upstream.
    """

    local: str
    remote: str

    def __str__(self) -> str:
        return self.local + self.remote

    @property
    def is_neutral(self) -> bool:
        """Check if nothing needs attention."""
        return self.local == NEUTRAL_LOCAL and self.remote == NEUTRAL_REMOTE


def _flag(value: bool, char: str) -> str:  # noqa: FBT001
    return char if value else " "


def encode_status(state: RepoState) -> StatusCode:
    """Return the status code of a repository state."""
    local = (
        _flag(state.has_untracked, "?")
        + _flag(state.has_new_staged, "+")
        + _flag(state.has_modified, "M")
    )
    if not state.has_upstream:
        return StatusCode(local, NO_UPSTREAM)
    remote = _flag(state.unpulled_count > 0, "v") + _flag(
        state.unpushed_count > 0, "^"
    )
    return StatusCode(local, remote)


class ReportRow(NamedTuple):
    """One line of the report."""

    name: str
    branch: str
    status: StatusCode
