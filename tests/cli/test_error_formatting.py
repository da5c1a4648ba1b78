"""Tests for CLI error formatting functionality."""

import pytest

from ciclone.cli.error_formatting import OUTPUT_TAIL_LINES, pretty_print_clone_error
from ciclone.exceptions import FatalCommandError, WorkspaceError
from ciclone.git.commands import FetchRef


@pytest.mark.short
class TestPrettyPrintCloneError:
    def test_command_error(self):
        error = FatalCommandError(
            FetchRef("refs/heads/main"),
            128,
            "fatal: couldn't find remote ref refs/heads/main\n",
            attempts=6,
        )
        result = pretty_print_clone_error(error)

        assert "git fetch --no-tags origin +refs/heads/main:" in result
        assert "exit code 128" in result
        assert "after 6 attempts" in result
        assert "  | fatal: couldn't find remote ref refs/heads/main" in result

    def test_output_is_tailed(self):
        output = "\n".join(f"line {i}" for i in range(50))
        error = FatalCommandError(FetchRef("refs/heads/main"), 1, output)
        result = pretty_print_clone_error(error)

        assert "line 49" in result
        assert "line 0\n" not in result
        assert len(result.splitlines()) == OUTPUT_TAIL_LINES + 1

    def test_other_errors(self):
        result = pretty_print_clone_error(WorkspaceError("/w", "Permission denied"))
        assert result == "Workspace error for /w: Permission denied"
