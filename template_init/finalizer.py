"""
finalizer.py

Responsibility: Install dependencies, then record the working tree in git.

Two history modes:
- `squash` (default): replace the branch history with one parentless root commit
  built from plumbing (`add`, `write-tree`, `commit-tree`, `reset`).
- `commit`: append an ordinary commit on top of the existing history.

Old commits are left to git's own garbage collection. Nothing here rolls back
earlier steps when a command fails.
"""

from __future__ import annotations

import logging
from typing import Sequence

from template_init.config import Config
from template_init.runner import CommandRunner

LOGGER = logging.getLogger(__name__)


def install_dependencies(runner: CommandRunner, command: Sequence[str]) -> bool:
    if not command:
        return False
    runner.run(command)
    LOGGER.info("dependencies installed (%s)", " ".join(command))
    return True


def squash_history(runner: CommandRunner, message: str) -> str:
    """Point the current branch at a new root commit of the current tree. Returns its id."""
    runner.run(["git", "add", "-A"])
    tree = runner.run(["git", "write-tree"]).strip()
    commit = runner.run(["git", "commit-tree", tree, "-m", message]).strip()
    runner.run(["git", "reset", "--soft", commit])
    LOGGER.info("history squashed to root commit %s", commit[:12])
    return commit


def commit_changes(runner: CommandRunner, message: str) -> str:
    runner.run(["git", "add", "-A"])
    runner.run(["git", "commit", "-m", message])
    commit = runner.run(["git", "rev-parse", "HEAD"]).strip()
    LOGGER.info("initial commit created %s", commit[:12])
    return commit


def finalize(runner: CommandRunner, config: Config) -> str:
    if config.install:
        install_dependencies(runner, config.defaults.install_command)
    if config.history == "commit":
        return commit_changes(runner, config.defaults.commit_message)
    return squash_history(runner, config.defaults.commit_message)
