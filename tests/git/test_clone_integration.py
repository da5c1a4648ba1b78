"""End-to-end clone tests against a local origin repository."""

import pytest
from git import Repo

from ciclone.exceptions import FatalCommandError, WorkspaceError
from ciclone.git.clone import CloneRunner, clone_workspace, describe_workspace
from ciclone.git.commands import InitRepository
from ciclone.model import BuildContext, CloneConfig

from tests.fakes import SleepRecorder

pytestmark = pytest.mark.integration

# (event, commit name, ref, file, expected content)
COMMITS = [
    ("push", "first", "refs/heads/master", "README", "Hello World!"),
    ("push", "head", "refs/heads/master", "README", "Hello World!\n"),
    ("pull_request", "first", "refs/pull/1/merge", "README", "Goodbye World!\n"),
    ("push", "branch", "refs/heads/test", "CONTRIBUTING.md", "## Contributing\n"),
    ("tag", "first", "refs/tags/v1.0", "README", "Hello World!"),
]


def _context(origin, workspace, event, commit, ref):
    return BuildContext(
        remote=origin.url,
        path=workspace,
        event=event,
        ref=ref,
        commit=origin.commits[commit],
    )


@pytest.mark.parametrize("event,commit,ref,file,data", COMMITS)
def test_clone(origin, tmp_path, event, commit, ref, file, data):
    """Clone a specific commit into a fresh, empty directory every time."""
    workspace = tmp_path / "workspaces" / f"{event}-{commit}"
    context = _context(origin, workspace, event, commit, ref)

    info = clone_workspace(context, CloneConfig())

    assert (workspace / file).read_text() == data
    if event != "pull_request":
        assert info["head"] == origin.commits[commit]
    else:
        assert info["head"] == origin.commits["pull"]


def test_clone_non_empty(origin, workspace):
    """Clone every commit in turn into the same directory, as with a cached workspace."""
    for index, (event, commit, ref, file, data) in enumerate(COMMITS):
        runner = CloneRunner(
            _context(origin, workspace, event, commit, ref), CloneConfig()
        )
        if index > 0:
            assert InitRepository() not in runner.plan()

        runner.run()

        assert (workspace / file).read_text() == data


def test_reset_discards_local_changes(origin, workspace):
    context = _context(origin, workspace, "push", "head", "refs/heads/master")
    clone_workspace(context, CloneConfig())
    (workspace / "README").write_text("local edit")

    clone_workspace(context, CloneConfig())

    assert (workspace / "README").read_text() == "Hello World!\n"


def test_tag_ref_with_push_event(origin, workspace):
    context = _context(origin, workspace, "push", "first", "refs/tags/v1.0")
    info = clone_workspace(context, CloneConfig())

    assert info["head"] == origin.commits["first"]
    assert info["branch"] == "detached"


def test_fetch_tags(origin, workspace):
    context = _context(origin, workspace, "push", "head", "refs/heads/master")
    clone_workspace(context, CloneConfig(tags=True))

    assert "v1.0" in [tag.name for tag in Repo(workspace).tags]


def test_missing_ref_is_retried_then_fails(origin, workspace):
    context = BuildContext(
        remote=origin.url,
        path=workspace,
        ref="refs/heads/not-yet-pushed",
        commit=origin.commits["head"],
    )
    sleep = SleepRecorder()
    runner = CloneRunner(
        context, CloneConfig(backoff=0.25, backoff_attempts=2), sleep=sleep
    )

    with pytest.raises(FatalCommandError) as exc_info:
        runner.run()

    assert sleep.delays == [0.25, 0.25]
    assert exc_info.value.attempts == 3
    assert "find remote ref" in exc_info.value.output


def test_describe_workspace_rejects_plain_directory(tmp_path):
    with pytest.raises(WorkspaceError):
        describe_workspace(tmp_path)
