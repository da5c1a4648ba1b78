"""
Workspace directory handling.

The workspace is the single directory a clone is materialized into. It is
probed at the start of every attempt, because a failed attempt removes it.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from ciclone.constants import GIT_METADATA_DIR
from ciclone.exceptions import WorkspaceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceState:
    """Snapshot of the workspace taken before planning."""

    path: Path
    initialized: bool


def is_dir_empty(path: Path) -> bool:
    """
    Check whether a directory is missing or has no entries.

    Args:
        path: Directory to inspect

    Returns:
        True if the directory cannot be listed or is empty
    """
    try:
        with os.scandir(path) as entries:
            return next(entries, None) is None
    except OSError:
        return True


def probe_workspace(path: Path) -> WorkspaceState:
    """Report whether ``path`` already holds a non-empty git metadata directory."""
    initialized = not is_dir_empty(path / GIT_METADATA_DIR)
    logger.debug(
        f"Workspace {path} is {'initialized' if initialized else 'not initialized'}"
    )
    return WorkspaceState(path=path, initialized=initialized)


def create_workspace(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(str(path), str(e)) from e


def remove_workspace(path: Path) -> None:
    """Delete the workspace directory and everything in it, if it exists."""
    if not path.exists():
        return
    logger.debug(f"Removing workspace {path}")
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise WorkspaceError(str(path), str(e)) from e
