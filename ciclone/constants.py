"""Constants shared by the planner, the retry policy and the CLI."""

GIT_BINARY = "git"
GIT_METADATA_DIR = ".git"
REMOTE_NAME = "origin"

# Build event labels as reported by the CI runner
EVENT_PUSH = "push"
EVENT_PULL_REQUEST = "pull_request"
EVENT_TAG = "tag"

TAG_REF_PREFIX = "refs/tags/"

DEFAULT_REF = "refs/heads/master"
DEFAULT_EVENT = EVENT_PUSH

# Output fragments of `git fetch` that indicate the remote has not yet
# published the requested ref.
TRANSIENT_FAILURE_SIGNATURES = ("find remote ref",)

DEFAULT_ATTEMPTS = 1
DEFAULT_BACKOFF_SECONDS = 5.0
DEFAULT_BACKOFF_ATTEMPTS = 5
DEFAULT_DEPTH = 0
