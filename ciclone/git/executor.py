"""
Execution of planned git operations.

Each operation runs as one blocking git process inside the workspace. Both
output streams are relayed live to this process' own stdout/stderr and are
also captured in full, so a failure can be classified afterwards.
"""

import codecs
import logging
import os
import selectors
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, List, Optional

from ciclone.constants import GIT_BINARY

from .commands import Operation

logger = logging.getLogger(__name__)

# Exit status reported when the git binary cannot be started at all
EXIT_NOT_EXECUTABLE = 127


@dataclass(frozen=True)
class ExecutionResult:
    """Exit status and combined output of one operation."""

    operation: Operation
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Executor:
    """Runs operations with the git binary, one at a time."""

    def __init__(
        self,
        git: str = GIT_BINARY,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
    ):
        self.git = git
        self._stdout = stdout
        self._stderr = stderr

    def command(self, operation: Operation) -> List[str]:
        return [self.git, *operation.args()]

    def execute(self, operation: Operation, workdir: Path) -> ExecutionResult:
        """
        Run a single operation in ``workdir`` and wait for it to exit.

        Args:
            operation: Operation to run
            workdir: Working directory of the git process

        Returns:
            ExecutionResult with the exit status and the captured output
        """
        command = self.command(operation)
        logger.info(f"+ {' '.join(command)}")

        try:
            process = subprocess.Popen(
                command,
                cwd=workdir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.debug(f"Could not start {command[0]}: {e}")
            return ExecutionResult(operation, EXIT_NOT_EXECUTABLE, str(e))

        with process:
            output = self._relay(process)
            returncode = process.wait()

        if returncode != 0:
            logger.debug(f"`{operation}` exited with code {returncode}")
        return ExecutionResult(operation, returncode, output)

    def run(
        self, operations: Iterable[Operation], workdir: Path
    ) -> List[ExecutionResult]:
        """
        Run operations in order, stopping at the first failure.

        Returns:
            One result per operation attempted; the last one is the failure, if any
        """
        results = []
        for operation in operations:
            result = self.execute(operation, workdir)
            results.append(result)
            if not result.ok:
                break
        return results

    def _relay(self, process: subprocess.Popen) -> str:
        """Copy both pipes to their sinks until EOF and return everything read."""
        sinks = (
            (process.stdout, self._stdout or sys.stdout),
            (process.stderr, self._stderr or sys.stderr),
        )
        captured = []

        with selectors.DefaultSelector() as selector:
            for pipe, sink in sinks:
                decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
                selector.register(pipe, selectors.EVENT_READ, (sink, decoder))

            while selector.get_map():
                for key, _ in selector.select():
                    sink, decoder = key.data
                    chunk = os.read(key.fd, 8192)
                    if chunk:
                        text = decoder.decode(chunk)
                    else:
                        text = decoder.decode(b"", final=True)
                        selector.unregister(key.fileobj)
                    if text:
                        sink.write(text)
                        sink.flush()
                        captured.append(text)

        return "".join(captured)
