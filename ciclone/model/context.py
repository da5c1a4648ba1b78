"""Pydantic models for the inputs of a single workspace preparation."""

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ciclone.constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_BACKOFF_ATTEMPTS,
    DEFAULT_BACKOFF_SECONDS,
    DEFAULT_EVENT,
    DEFAULT_REF,
)


def validate_non_empty_string(v: str) -> str:
    """Validate that a string is not empty."""
    if not v or not v.strip():
        raise ValueError("must be a non-empty string")
    return v


class BuildContext(BaseModel):
    """What to check out, and where."""

    model_config = ConfigDict(frozen=True)

    remote: str = Field(..., description="Remote repository URL")
    path: Path = Field(..., description="Workspace directory")
    event: str = Field(DEFAULT_EVENT, description="Build event label")
    ref: str = Field(DEFAULT_REF, description="Symbolic ref to fetch")
    commit: str = Field("", description="Commit sha to reset to")
    branch: Optional[str] = Field(None, description="Branch name")
    number: Optional[int] = Field(None, description="Build number")

    @field_validator("remote", "ref")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @field_validator("path", mode="before")
    @classmethod
    def validate_path_given(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Workspace path must be a non-empty path")
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        return v.expanduser().absolute()


class CloneConfig(BaseModel):
    """How the checkout is performed and retried."""

    model_config = ConfigDict(frozen=True)

    depth: int = Field(0, ge=0, description="Fetch depth, 0 for full history")
    tags: bool = Field(False, description="Fetch tags")
    skip_verify: bool = Field(False, description="Skip TLS verification")
    recursive: bool = Field(False, description="Initialize submodules")
    submodule_remote: bool = Field(
        False, description="Update submodules to their remote tracking branch"
    )
    submodule_overrides: Dict[str, str] = Field(
        default_factory=dict, description="Submodule name to URL overrides"
    )
    attempts: int = Field(
        DEFAULT_ATTEMPTS, ge=1, description="Full clone attempts on failure"
    )
    backoff: float = Field(
        DEFAULT_BACKOFF_SECONDS, ge=0, description="Seconds between retries"
    )
    backoff_attempts: int = Field(
        DEFAULT_BACKOFF_ATTEMPTS,
        ge=0,
        description="Retries of a single operation on a transient failure",
    )

    @field_validator("submodule_overrides")
    @classmethod
    def sort_overrides(cls, v: Dict[str, str]) -> Dict[str, str]:
        for name, url in v.items():
            validate_non_empty_string(name)
            validate_non_empty_string(url)
        return dict(sorted(v.items()))


class NetrcCredentials(BaseModel):
    """Machine credentials and key material for the remote."""

    model_config = ConfigDict(frozen=True)

    machine: str = ""
    login: str = ""
    password: str = ""
    ssh_key: str = ""

    @property
    def has_netrc(self) -> bool:
        return bool(self.machine)

    @property
    def has_ssh_key(self) -> bool:
        return bool(self.ssh_key.strip())
