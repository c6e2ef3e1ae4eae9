"""Fixtures that build real git repositories in a temporary folder."""

from pathlib import Path

import pytest
from git import Repo


def commit_file(repo: Repo, filename: str, content: str | None = None) -> None:
    """Write a file and commit it."""
    assert repo.working_tree_dir is not None
    (Path(repo.working_tree_dir) / filename).write_text(content or filename)
    repo.index.add([filename])
    repo.index.commit(f"add {filename}")


def make_repo(path: Path) -> Repo:
    """Create a repo with one commit on `main`."""
    repo = Repo.init(path, mkdir=True)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
    commit_file(repo, "README.md")
    repo.git.branch("-M", "main")
    return repo


def add_upstream(repo: Repo, remote_path: Path) -> Repo:
    """Push `main` to a new bare remote and track it."""
    remote = Repo.init(remote_path, mkdir=True, bare=True)
    repo.create_remote("origin", str(remote_path))
    repo.git.push("-u", "origin", "main")
    return remote


def push_from_clone(remote_path: Path, clone_path: Path, filename: str) -> None:
    """Add a commit to the remote from another clone."""
    clone = Repo.clone_from(str(remote_path), clone_path, branch="main")
    with clone.config_writer() as config:
        config.set_value("user", "name", "Other User")
        config.set_value("user", "email", "other@example.com")
    commit_file(clone, filename)
    clone.git.push("origin", "main")


@pytest.fixture
def remotes_dir(tmp_path: Path) -> Path:
    """A folder for bare remotes and extra clones, outside the scanned root."""
    path = tmp_path / "remotes"
    path.mkdir()
    return path


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """An empty folder to scan."""
    path = tmp_path / "root"
    path.mkdir()
    return path


@pytest.fixture
def alpha_beta(root: Path, remotes_dir: Path) -> Path:
    """Two repos: `alpha` is in sync, `beta` has an untracked file and a commit."""
    alpha = make_repo(root / "alpha")
    add_upstream(alpha, remotes_dir / "alpha.git")
    beta = make_repo(root / "beta")
    add_upstream(beta, remotes_dir / "beta.git")
    commit_file(beta, "feature.py")
    (root / "beta" / "notes.txt").write_text("todo")
    return root
