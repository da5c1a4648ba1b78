"""Tests for build event classification."""

import pytest

from ciclone.git.events import EventCategory, classify_event, is_pull_request, is_tag


@pytest.mark.short
class TestClassifyEvent:
    def test_push_is_ordinary(self):
        assert classify_event("push", "refs/heads/master") is EventCategory.ordinary

    def test_pull_request(self):
        assert (
            classify_event("pull_request", "refs/pull/208/merge")
            is EventCategory.pull_request
        )

    def test_tag_event(self):
        assert classify_event("tag", "refs/tags/v1.17") is EventCategory.tag

    def test_tag_detected_from_ref_alone(self):
        assert classify_event("push", "refs/tags/v1.17") is EventCategory.tag

    def test_unknown_event_is_ordinary(self):
        assert classify_event("deployment", "refs/heads/main") is EventCategory.ordinary
        assert classify_event("", "") is EventCategory.ordinary


@pytest.mark.short
def test_helpers():
    assert is_pull_request("pull_request")
    assert not is_pull_request("push")
    assert is_tag("tag", "refs/heads/master")
    assert is_tag("push", "refs/tags/v1")
    assert not is_tag("push", "refs/heads/tags/v1")
