"""
Operations issued to the git binary.

Each operation is an immutable value that knows the argument list of its
single git invocation. Operations are compared structurally, so two plans
built from the same inputs compare equal.

    InitRepository           init
    SetRemote(url)           remote add origin <url>
    DisableTlsVerification   config --global http.sslVerify false
    FetchRef(ref, tags, n)   fetch --tags|--no-tags [--depth=n] origin +<ref>:
    CheckoutHead             checkout -qf FETCH_HEAD
    CheckoutCommit(sha)      reset --hard -q <sha>
    RemapSubmodule(name, u)  config submodule.<name>.url <u>
    UpdateSubmodules(remote) submodule update --init --recursive [--remote]
"""

from dataclasses import dataclass
from typing import List

from ciclone.constants import REMOTE_NAME


@dataclass(frozen=True)
class Operation:
    """Base class for a single git invocation."""

    def args(self) -> List[str]:
        raise NotImplementedError

    def __str__(self) -> str:
        return " ".join(self.args())


@dataclass(frozen=True)
class InitRepository(Operation):
    """Creates an empty repository."""

    def args(self) -> List[str]:
        return ["init"]


@dataclass(frozen=True)
class SetRemote(Operation):
    """Sets the origin remote."""

    url: str

    def args(self) -> List[str]:
        return ["remote", "add", REMOTE_NAME, self.url]


@dataclass(frozen=True)
class DisableTlsVerification(Operation):
    """Configures git to skip TLS verification, e.g. for self-signed certificates."""

    def args(self) -> List[str]:
        return ["config", "--global", "http.sslVerify", "false"]


@dataclass(frozen=True)
class FetchRef(Operation):
    """Fetches a single ref from origin into FETCH_HEAD.

    A depth of 0 fetches the full history.
    """

    ref: str
    tags: bool = False
    depth: int = 0

    def args(self) -> List[str]:
        args = ["fetch", "--tags" if self.tags else "--no-tags"]
        if self.depth != 0:
            args.append(f"--depth={self.depth}")
        args.extend([REMOTE_NAME, f"+{self.ref}:"])
        return args


@dataclass(frozen=True)
class CheckoutHead(Operation):
    """Checks out whatever was last fetched."""

    def args(self) -> List[str]:
        return ["checkout", "-qf", "FETCH_HEAD"]


@dataclass(frozen=True)
class CheckoutCommit(Operation):
    """Hard-resets the work tree to an exact commit, discarding local changes."""

    sha: str

    def args(self) -> List[str]:
        return ["reset", "--hard", "-q", self.sha]


@dataclass(frozen=True)
class RemapSubmodule(Operation):
    """Points a submodule at an alternate URL before it is initialized."""

    name: str
    url: str

    def args(self) -> List[str]:
        return ["config", f"submodule.{self.name}.url", self.url]


@dataclass(frozen=True)
class UpdateSubmodules(Operation):
    """Recursively initializes and updates submodules."""

    remote: bool = False

    def args(self) -> List[str]:
        args = ["submodule", "update", "--init", "--recursive"]
        if self.remote:
            args.append("--remote")
        return args
