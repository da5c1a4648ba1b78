import io
import shutil

import pytest
import logging

from pathlib import Path

from ciclone.cli.utils.logging import reset_logging

from .origin import OriginRepoBuilder


@pytest.fixture(autouse=True)
def detach_cli_logging():
    """CLI invocations bind log handlers to streams that close with the runner."""
    yield
    reset_logging()


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("ciclone")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream  # Yield the stream to the test function

    # Cleanup after the test
    logger.removeHandler(handler)
    log_stream.close()


# git fixtures


@pytest.fixture
def origin(tmp_path) -> OriginRepoBuilder:
    """A local origin repository with a branch, a tag and a pull request ref."""
    if shutil.which("git") is None:
        pytest.skip("git binary not available")
    return OriginRepoBuilder(tmp_path / "origin").build()


@pytest.fixture
def workspace(tmp_path) -> Path:
    return tmp_path / "workspace" / "octocat" / "Hello-World"
