"""git-folder-summary: One-line branch and sync status for every repo in a folder.

© 2025 Tsvika Shapira. Some rights reserved.
"""

from ._version import version as _version
from .backend import GitBackend, GitCliBackend, RepoState, query_repository
from .layout import Layout, plan_layout
from .locate import PathError, RepositoryRef, locate_repositories
from .report import ReportRow, ReportState, ReportStreamer
from .status import StatusCode, encode_status

__version__ = _version
__all__: list[str] = [
    "GitBackend",
    "GitCliBackend",
    "Layout",
    "PathError",
    "RepoState",
    "ReportRow",
    "ReportState",
    "ReportStreamer",
    "RepositoryRef",
    "StatusCode",
    "encode_status",
    "locate_repositories",
    "plan_layout",
    "query_repository",
]
