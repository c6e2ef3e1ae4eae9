"""Stream the status table of all repositories in a folder."""

from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path

from .backend import GitBackend, GitCliBackend, query_repository, resolve_branch
from .format import format_divider, format_header, format_row, format_tally
from .layout import plan_layout
from .locate import PathError, RepositoryRef, locate_repositories
from .status import ReportRow, encode_status

__all__ = ["ReportRow", "ReportState", "ReportStreamer"]


class ReportState(Enum):
    """Progress of a report run.

    A run goes INIT, PLANNING, HEADER_PRINTED, then ROW_PRINTED for each row,
    and ends in DONE. A run without repositories passes through EMPTY to DONE
    without printing anything. A bad root ends the run in ABORTED.
    """

    INIT = "init"
    PLANNING = "planning"
    HEADER_PRINTED = "header_printed"
    ROW_PRINTED = "row_printed"
    DONE = "done"
    EMPTY = "empty"
    ABORTED = "aborted"


class ReportStreamer:
    """Query the repositories of a folder one by one and report each row.

    Repositories and their branches are collected first, so the columns can
    be sized before the first line. The full status of each repository is
    queried only when its row is due, so slow repositories don't hold back
    the rows before them.
    """

    def __init__(  # noqa: PLR0913
        self,
        root: Path,
        *,
        skip_fetch: bool = False,
        quiet: bool = False,
        exclude_dirs: Iterable[str] | None = None,
        backend: GitBackend | None = None,
        color: bool = False,
    ) -> None:
        self.root = Path(root)
        self.skip_fetch = skip_fetch
        self.quiet = quiet
        self.exclude_dirs = list(exclude_dirs or [])
        self.backend: GitBackend = backend or GitCliBackend()
        self.color = color
        self.state = ReportState.INIT
        self.checked = 0

    def _plan(self) -> list[tuple[RepositoryRef, str]]:
        self.state = ReportState.PLANNING
        self.checked = 0
        try:
            repos = list(locate_repositories(self.root, self.exclude_dirs))
        except PathError:
            self.state = ReportState.ABORTED
            raise
        return [(repo, resolve_branch(repo.path, self.backend)) for repo in repos]

    def _query_rows(
        self, planned: list[tuple[RepositoryRef, str]]
    ) -> Iterator[ReportRow]:
        for repo, branch in planned:
            state = query_repository(
                repo.path,
                skip_fetch=self.skip_fetch,
                backend=self.backend,
                branch=branch,
            )
            self.checked += 1
            yield ReportRow(repo.name, state.branch, encode_status(state))

    def _finish_empty(self) -> None:
        self.state = ReportState.EMPTY
        self.state = ReportState.DONE

    def rows(self) -> Iterator[ReportRow]:
        """Yield a row for every repository, in discovery order."""
        planned = self._plan()
        if not planned:
            self._finish_empty()
            return
        yield from self._query_rows(planned)
        self.state = ReportState.DONE

    def lines(self) -> Iterator[str]:
        """Yield the lines of the table, each as soon as it is known."""
        planned = self._plan()
        if not planned:
            self._finish_empty()
            return
        layout = plan_layout(
            [repo.name for repo, _ in planned], [branch for _, branch in planned]
        )
        self.state = ReportState.HEADER_PRINTED
        yield format_header(layout)
        yield format_divider(layout)
        for row in self._query_rows(planned):
            if self.quiet and row.status.is_neutral:
                continue
            self.state = ReportState.ROW_PRINTED
            yield format_row(row, layout, color=self.color)
        if self.quiet:
            yield format_tally(self.checked)
        self.state = ReportState.DONE
