"""
Git operations for preparing a CI build workspace.

Control flow of a single clone:

    BuildContext + CloneConfig
        -> classify_event      (ordinary / pull_request / tag)
        -> probe_workspace     (fresh or reused directory)
        -> plan_operations     (ordered list of git operations)
        -> RetryPolicy         (per-operation retries on transient failures)
        -> Executor            (one blocking git process per operation)

CloneRunner wraps the whole cycle and, on failure, removes the workspace and
starts over for the configured number of attempts.
"""

from .clone import (
    CloneRunner,
    check_preconditions,
    clone_workspace,
    describe_workspace,
)
from .commands import (
    CheckoutCommit,
    CheckoutHead,
    DisableTlsVerification,
    FetchRef,
    InitRepository,
    Operation,
    RemapSubmodule,
    SetRemote,
    UpdateSubmodules,
)
from .events import EventCategory, classify_event
from .executor import ExecutionResult, Executor
from .planner import plan_operations
from .retry import FailureClassifier, FailureKind, RetryPolicy, SignatureClassifier
from .workspace import WorkspaceState, probe_workspace

__all__ = [
    "CloneRunner",
    "check_preconditions",
    "clone_workspace",
    "describe_workspace",
    "Operation",
    "InitRepository",
    "SetRemote",
    "DisableTlsVerification",
    "FetchRef",
    "CheckoutHead",
    "CheckoutCommit",
    "RemapSubmodule",
    "UpdateSubmodules",
    "EventCategory",
    "classify_event",
    "ExecutionResult",
    "Executor",
    "plan_operations",
    "FailureClassifier",
    "FailureKind",
    "RetryPolicy",
    "SignatureClassifier",
    "WorkspaceState",
    "probe_workspace",
]
