import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from ciclone.credentials import provision_credentials
from ciclone.exceptions import CommandError, WorkspaceError
from ciclone.model import BuildContext, CloneConfig, NetrcCredentials

from .commands import Operation
from .events import EventCategory, classify_event
from .executor import ExecutionResult, Executor
from .planner import plan_operations
from .retry import FailureClassifier, RetryPolicy
from .workspace import create_workspace, probe_workspace, remove_workspace

logger = logging.getLogger(__name__)


def check_preconditions(context: BuildContext) -> None:
    """
    Reject a build context that cannot be planned.

    Raises:
        ValueError: If an ordinary event carries no commit to reset to
    """
    category = classify_event(context.event, context.ref)
    if category is EventCategory.ordinary and not context.commit:
        raise ValueError(
            f"A commit sha is required to check out {context.ref} "
            f"for a `{context.event}` event"
        )


class CloneRunner:
    """
    Prepare a workspace for one build, restarting from scratch on failure.

    Every attempt probes the workspace, plans the operations and runs them
    through the retry policy. When an attempt fails and more attempts are
    allowed, the workspace directory is removed and the next attempt starts
    from an empty directory.

    Args:
        context: Remote, ref and commit being built
        config: Clone and retry configuration
        credentials: Credential material written before each attempt
        executor: Executor for git operations (defaults to the git binary)
        classifier: Failure classifier for the per-operation retries
        sleep: Blocking sleep used between per-operation retries
        home: Home directory for credential files (defaults to the user's home)
    """

    def __init__(
        self,
        context: BuildContext,
        config: CloneConfig,
        credentials: Optional[NetrcCredentials] = None,
        executor: Optional[Executor] = None,
        classifier: Optional[FailureClassifier] = None,
        sleep: Callable[[float], None] = time.sleep,
        home: Optional[Path] = None,
    ):
        self.context = context
        self.config = config
        self.credentials = credentials
        self.executor = executor or Executor()
        self.retry = RetryPolicy.from_config(config, classifier=classifier, sleep=sleep)
        self.home = home

    @property
    def path(self) -> Path:
        return self.context.path

    def check_preconditions(self) -> None:
        check_preconditions(self.context)

    def plan(self) -> List[Operation]:
        """Plan the operations for the workspace as it is right now."""
        state = probe_workspace(self.path)
        return plan_operations(state, self.context, self.config)

    def attempt(self) -> List[ExecutionResult]:
        """Run a single full attempt: prepare the directory, plan, execute."""
        create_workspace(self.path)
        provision_credentials(self.credentials, self.home)
        operations = self.plan()
        return self.retry.run_plan(self.executor, operations, self.path)

    def run(self) -> List[ExecutionResult]:
        """
        Run attempts until one succeeds or the configured number is used up.

        Returns:
            Results of the successful attempt

        Raises:
            ValueError: If the build context cannot be planned
            CommandError: The failure of the last attempt
            WorkspaceError: If the workspace cannot be created or removed
            CredentialError: If credential files cannot be written
        """
        self.check_preconditions()

        attempts = self.config.attempts
        if attempts > 1:
            logger.info(f"Will do up to {attempts} attempts")

        for attempt in range(1, attempts):
            try:
                return self.attempt()
            except CommandError as e:
                logger.warning(f"Attempt {attempt}/{attempts} failed: {e}")
                logger.info(f"Removing {self.path} and starting over")
                remove_workspace(self.path)

        return self.attempt()


def describe_workspace(path: Path) -> dict:
    """
    Describe the checked out revision of a workspace.

    Args:
        path: Workspace directory

    Returns:
        Dictionary with:
        - path: Workspace directory
        - head: Full sha of HEAD
        - branch: Current branch name (or "detached")

    Raises:
        WorkspaceError: If the directory is not a repository with a valid HEAD
    """
    try:
        repo = Repo(path)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise WorkspaceError(str(path), f"not a git repository ({e})") from e

    try:
        head = repo.head.commit.hexsha
    except ValueError as e:
        raise WorkspaceError(str(path), f"HEAD does not point to a commit ({e})") from e

    branch = "detached" if repo.head.is_detached else repo.active_branch.name

    return {"path": str(path), "head": head, "branch": branch}


def clone_workspace(
    context: BuildContext,
    config: CloneConfig,
    credentials: Optional[NetrcCredentials] = None,
    **kwargs,
) -> dict:
    """
    Prepare a workspace and describe the revision that ended up checked out.

    This is the main entry point; keyword arguments are passed to CloneRunner.
    """
    runner = CloneRunner(context, config, credentials, **kwargs)
    runner.run()
    info = describe_workspace(context.path)
    logger.info(f"Checked out {context.remote}@{info['head'][:7]} to {context.path}")
    return info
