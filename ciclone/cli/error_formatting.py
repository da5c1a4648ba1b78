"""Error formatting for CLI output."""

from ciclone.exceptions import CloneError, CommandError

# Lines of captured git output shown under a failed command
OUTPUT_TAIL_LINES = 10


def pretty_print_clone_error(error: CloneError) -> str:
    """Format a CloneError to present useful information to the user.

    Command failures show the failing command, its exit status and the
    last lines of its output.

    Example output:
        `git fetch --no-tags origin +refs/heads/main:` failed with exit code 128
          | fatal: couldn't find remote ref refs/heads/main
    """
    message_parts = [str(error)]

    if isinstance(error, CommandError) and error.output.strip():
        lines = error.output.rstrip().splitlines()[-OUTPUT_TAIL_LINES:]
        message_parts.extend(f"  | {line}" for line in lines)

    return "\n".join(message_parts)
