"""Classification of the build event that triggered a clone."""

from enum import Enum

from ciclone.constants import EVENT_PULL_REQUEST, EVENT_TAG, TAG_REF_PREFIX


class EventCategory(str, Enum):
    """How the requested revision must be checked out."""

    ordinary = "ordinary"
    pull_request = "pull_request"
    tag = "tag"


def is_pull_request(event: str) -> bool:
    return event == EVENT_PULL_REQUEST


def is_tag(event: str, ref: str) -> bool:
    # A tag ref is a tag regardless of the reported event
    return event == EVENT_TAG or ref.startswith(TAG_REF_PREFIX)


def classify_event(event: str, ref: str) -> EventCategory:
    """
    Map a build event label and the fetched ref to an event category.

    Args:
        event: Event label reported by the CI runner (push, pull_request, tag, ...)
        ref: Symbolic ref being built (e.g. refs/heads/main, refs/tags/v1.0)

    Returns:
        EventCategory for the build. Unknown labels are treated as ordinary.
    """
    if is_pull_request(event):
        return EventCategory.pull_request
    if is_tag(event, ref):
        return EventCategory.tag
    return EventCategory.ordinary
