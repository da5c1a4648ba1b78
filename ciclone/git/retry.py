"""
Retrying of individual git operations.

A failed operation is classified from its captured output. Failures that
match a known transient signature (the remote has not published the ref
yet) are retried in place after a fixed backoff; everything else is fatal
and left to the caller, which may restart the whole clone.
"""

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from humanfriendly import format_timespan

from ciclone.constants import (
    DEFAULT_BACKOFF_ATTEMPTS,
    DEFAULT_BACKOFF_SECONDS,
    TRANSIENT_FAILURE_SIGNATURES,
)
from ciclone.exceptions import FatalCommandError, TransientCommandError
from ciclone.model import CloneConfig

from .commands import Operation
from .executor import ExecutionResult, Executor

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"


class FailureClassifier(Protocol):
    """Decides whether the output of a failed operation is worth a retry."""

    def classify(self, output: str) -> FailureKind: ...


class SignatureClassifier:
    """Classifies failures as transient when the output contains a known signature."""

    def __init__(self, signatures: Sequence[str] = TRANSIENT_FAILURE_SIGNATURES):
        self.signatures = tuple(signatures)

    def classify(self, output: str) -> FailureKind:
        if any(signature in output for signature in self.signatures):
            return FailureKind.TRANSIENT
        return FailureKind.FATAL


class RetryPolicy:
    """
    Runs operations through an executor, retrying transient failures.

    Args:
        attempts: How many times a transiently failing operation is re-run
        backoff: Seconds to wait before each re-run
        classifier: Failure classifier, defaults to SignatureClassifier
        sleep: Blocking sleep function
    """

    def __init__(
        self,
        attempts: int = DEFAULT_BACKOFF_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF_SECONDS,
        classifier: Optional[FailureClassifier] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.attempts = attempts
        self.backoff = backoff
        self.classifier = classifier or SignatureClassifier()
        self.sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: CloneConfig,
        classifier: Optional[FailureClassifier] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "RetryPolicy":
        return cls(
            attempts=config.backoff_attempts,
            backoff=config.backoff,
            classifier=classifier,
            sleep=sleep,
        )

    def check(self, result: ExecutionResult) -> ExecutionResult:
        """
        Raise for a failed result.

        Raises:
            TransientCommandError: If the output matches a transient signature
            FatalCommandError: For any other non-zero exit
        """
        if result.ok:
            return result
        if self.classifier.classify(result.output) is FailureKind.TRANSIENT:
            raise TransientCommandError(
                result.operation, result.returncode, result.output
            )
        raise FatalCommandError(result.operation, result.returncode, result.output)

    def run_operation(
        self, executor: Executor, operation: Operation, workdir: Path
    ) -> ExecutionResult:
        """
        Run one operation, re-running it with identical arguments while it fails transiently.

        Raises:
            FatalCommandError: On a non-transient failure, or once retries are exhausted
        """
        retries = 0
        while True:
            try:
                return self.check(executor.execute(operation, workdir))
            except TransientCommandError as e:
                if retries >= self.attempts:
                    raise FatalCommandError(
                        operation, e.returncode, e.output, attempts=retries + 1
                    ) from e
                retries += 1
                logger.warning(
                    f"`git {operation}` failed with exit code {e.returncode}, "
                    f"retry {retries}/{self.attempts} in {format_timespan(self.backoff)}"
                )
                self.sleep(self.backoff)

    def run_plan(
        self, executor: Executor, operations: Iterable[Operation], workdir: Path
    ) -> List[ExecutionResult]:
        """Run every operation in order; the first unrecovered failure is raised."""
        return [
            self.run_operation(executor, operation, workdir) for operation in operations
        ]
