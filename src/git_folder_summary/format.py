"""Format the lines of a `git_folder_summary` report."""

import json
from collections.abc import Iterable
from typing import Literal

import yaml
from colorama import Fore

from .layout import Layout
from .status import STATUS_WIDTH, ReportRow

REPORT_FORMATS = ["table", "json", "yaml"]
REPORT_FORMATS_TYPE = Literal["table", "json", "yaml"]
COLUMN_SEP = "  "
TITLES = ("repo", "branch", "state")


def _columns(layout: Layout, name: str, branch: str, state: str) -> str:
    return COLUMN_SEP.join(
        [name.ljust(layout.repo_width), branch.ljust(layout.branch_width), state]
    )


def format_header(layout: Layout) -> str:
    """Format the column titles."""
    return _columns(layout, *TITLES)


def format_divider(layout: Layout) -> str:
    """Format the line under the column titles."""
    return _columns(
        layout, "=" * layout.repo_width, "=" * layout.branch_width, "=" * STATUS_WIDTH
    )


def format_row(row: ReportRow, layout: Layout, *, color: bool = False) -> str:
    """Format one repository, highlighted if it needs attention."""
    line = _columns(layout, row.name, row.branch, str(row.status))
    if color and not row.status.is_neutral:
        return Fore.LIGHTRED_EX + line + Fore.RESET
    return line


def format_tally(count: int) -> str:
    """Format the closing line of a quiet report."""
    return f"Checked {count} repositories."


def format_rows(rows: Iterable[ReportRow], fmt: REPORT_FORMATS_TYPE) -> str:
    """Format all rows at once, for consumption by other tools."""
    data = {
        row.name: {"branch": row.branch, "state": str(row.status)} for row in rows
    }
    try:
        return {
            "json": _format_json,
            "yaml": _format_yaml,
        }[fmt](data)  # type: ignore[index]
    except KeyError as e:
        raise ValueError(f"format_rows got an unsupported {fmt=}") from e


def _format_yaml(data: dict[str, dict[str, str]]) -> str:
    return yaml.dump(
        data,
        allow_unicode=True,
        default_flow_style=False,
        indent=2,
        sort_keys=False,
    )


def _format_json(data: dict[str, dict[str, str]]) -> str:
    return json.dumps(data, indent=2)
