"""Plan the column widths of the report."""

from collections.abc import Iterable
from typing import NamedTuple


class Layout(NamedTuple):
    """Widths of the repo and branch columns."""

    repo_width: int
    branch_width: int


def _max_len(items: Iterable[str]) -> int:
    return max((len(item) for item in items), default=0)


def plan_layout(repo_names: Iterable[str], branch_names: Iterable[str]) -> Layout:
    """Return the widths needed to align every repo and branch name."""
    return Layout(_max_len(repo_names), _max_len(branch_names))
