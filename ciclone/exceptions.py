"""
Exception classes for workspace preparation.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ciclone.git.commands import Operation


class CloneError(Exception):
    """Base exception for all clone-related errors."""

    pass


class WorkspaceError(CloneError):
    """Raised when the workspace directory cannot be created or removed."""

    def __init__(self, path: str, message: str = ""):
        self.path = path
        if message:
            super().__init__(f"Workspace error for {path}: {message}")
        else:
            super().__init__(f"Could not prepare workspace {path}")


class CredentialError(CloneError):
    """Raised when credential material cannot be written."""

    def __init__(self, target: str, message: str = ""):
        self.target = target
        if message:
            super().__init__(f"Could not write credentials to {target}: {message}")
        else:
            super().__init__(f"Could not write credentials to {target}")


class CommandError(CloneError):
    """Raised when a git operation exits with a non-zero status."""

    def __init__(
        self,
        operation: "Operation",
        returncode: int,
        output: str = "",
        attempts: Optional[int] = None,
    ):
        self.operation = operation
        self.returncode = returncode
        self.output = output
        self.attempts = attempts
        message = f"`git {operation}` failed with exit code {returncode}"
        if attempts is not None and attempts > 1:
            message += f" after {attempts} attempts"
        super().__init__(message)


class TransientCommandError(CommandError):
    """The failure matches a known transient signature and may be retried."""

    pass


class FatalCommandError(CommandError):
    """The failure is not recoverable at the operation level."""

    pass
