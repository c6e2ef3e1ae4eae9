"""Generate sample output."""

from git_folder_summary.format import format_divider, format_header, format_row
from git_folder_summary.layout import plan_layout
from git_folder_summary.status import ReportRow, StatusCode

rows = [
    ReportRow("my-repo", "main", StatusCode("  M", "  ")),
    ReportRow("my-other-repo", "develop", StatusCode("   ", "v^")),
    ReportRow("my-3rd-repo", "main", StatusCode("?  ", "  ")),
    ReportRow("repo-4", "feature/login", StatusCode(" + ", "--")),
    ReportRow("clean-repo", "main", StatusCode("   ", "  ")),
]
layout = plan_layout([row.name for row in rows], [row.branch for row in rows])
print(format_header(layout))
print(format_divider(layout))
for row in rows:
    print(format_row(row, layout, color=True))
