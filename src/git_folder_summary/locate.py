"""Find the git repositories directly under a folder."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({"node_modules"})


class PathError(Exception):
    """The folder to scan does not exist or is not a directory."""


@dataclass(frozen=True)
class RepositoryRef:
    """A repository found under the scanned folder."""

    name: str
    path: Path


def locate_repositories(
    root: Path, exclude_dirs: Iterable[str] | None = None
) -> Iterator[RepositoryRef]:
    """Return the repositories that are immediate children of `root`.

    The root is checked right away; the children are listed lazily, in the
    order the filesystem returns them. A child counts as a repository when it
    holds a `.git` directory. Children named in `exclude_dirs` or in
    `DEFAULT_EXCLUDE_DIRS` are skipped.
    """
    root = Path(root)
    if not root.exists():
        raise PathError(f"'{root}' does not exist")
    if not root.is_dir():
        raise PathError(f"'{root}' is not a directory")
    excluded = DEFAULT_EXCLUDE_DIRS.union(exclude_dirs or [])
    return _iter_repositories(root.resolve(), excluded)


def _iter_repositories(
    root: Path, excluded: frozenset[str]
) -> Iterator[RepositoryRef]:
    try:
        for folder in root.iterdir():
            try:
                found = is_repository(folder, excluded)
            except OSError as e:
                logger.debug("skipping unreadable %s: %s", folder, e)
                continue
            if found:
                yield RepositoryRef(name=folder.name, path=folder)
    except OSError as e:
        raise PathError(f"can't list '{root}'") from e


def is_repository(folder: Path, excluded: Iterable[str] = ()) -> bool:
    """Check if a folder holds a `.git` directory and is not excluded."""
    if folder.name in excluded or folder.is_symlink():
        return False
    git_dir = folder / GIT_DIR_NAME
    return git_dir.is_dir() and not git_dir.is_symlink()
