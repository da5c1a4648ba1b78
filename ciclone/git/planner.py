"""
Planning of the git operations for one clone attempt.

The planner is a pure function of the workspace state, the build context and
the clone configuration. It never fails and never touches the filesystem, so
the same inputs always produce the same list of operations.
"""

from typing import List

from ciclone.model import BuildContext, CloneConfig

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
from .workspace import WorkspaceState


def plan_checkout(category: EventCategory, context: BuildContext) -> Operation:
    """Select the operation that materializes the fetched revision."""
    if category in (EventCategory.pull_request, EventCategory.tag):
        # The requested sha need not be reachable from a branch tip here
        return CheckoutHead()
    return CheckoutCommit(context.commit)


def plan_operations(
    state: WorkspaceState, context: BuildContext, config: CloneConfig
) -> List[Operation]:
    """
    Build the ordered list of git operations for a single attempt.

    Args:
        state: Workspace state probed at the start of the attempt
        context: Remote, ref and commit being built
        config: Clone configuration

    Returns:
        Operations in execution order
    """
    operations: List[Operation] = []

    if config.skip_verify:
        operations.append(DisableTlsVerification())

    if not state.initialized:
        operations.append(InitRepository())
        operations.append(SetRemote(context.remote))

    operations.append(FetchRef(context.ref, tags=config.tags, depth=config.depth))

    category = classify_event(context.event, context.ref)
    operations.append(plan_checkout(category, context))

    for name in sorted(config.submodule_overrides):
        operations.append(RemapSubmodule(name, config.submodule_overrides[name]))

    if config.recursive:
        operations.append(UpdateSubmodules(remote=config.submodule_remote))

    return operations
