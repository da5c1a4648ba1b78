"""Credential files needed by git to authenticate against the remote."""

import logging
import os
from pathlib import Path
from typing import Optional

from ciclone.exceptions import CredentialError
from ciclone.model import NetrcCredentials

logger = logging.getLogger(__name__)

NETRC_TEMPLATE = """
machine {machine}
login {login}
password {password}
"""


def _write_private(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` readable by the owner only."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(content)
    os.chmod(path, 0o600)


def write_netrc(credentials: NetrcCredentials, home: Path) -> Optional[Path]:
    """
    Write a netrc file for the remote machine.

    Returns:
        Path of the written file, or None if no machine is configured
    """
    if not credentials.has_netrc:
        return None

    path = home / ".netrc"
    content = NETRC_TEMPLATE.format(
        machine=credentials.machine,
        login=credentials.login,
        password=credentials.password,
    )
    try:
        _write_private(path, content)
    except OSError as e:
        raise CredentialError(str(path), str(e)) from e

    logger.debug(f"Wrote netrc for {credentials.machine} to {path}")
    return path


def write_ssh_key(credentials: NetrcCredentials, home: Path) -> Optional[Path]:
    """
    Write the private SSH key used for git-over-ssh remotes.

    Returns:
        Path of the written key, or None if no key is configured
    """
    if not credentials.has_ssh_key:
        return None

    ssh_dir = home / ".ssh"
    path = ssh_dir / "id_rsa"
    key = credentials.ssh_key
    if not key.endswith("\n"):
        key += "\n"
    try:
        ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        _write_private(path, key)
    except OSError as e:
        raise CredentialError(str(path), str(e)) from e

    logger.debug(f"Wrote private key to {path}")
    return path


def provision_credentials(
    credentials: Optional[NetrcCredentials], home: Optional[Path] = None
) -> None:
    """Write all configured credential material; a no-op when nothing is configured."""
    if credentials is None:
        return
    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            home = Path("/root")
    write_netrc(credentials, home)
    write_ssh_key(credentials, home)
