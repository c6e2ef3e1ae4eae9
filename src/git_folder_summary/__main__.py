"""Run git-folder-summary as a module."""

from .cli import app

app(prog_name="git-folder-summary")
