from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from git import Repo

import logging

logger = logging.getLogger(__name__)


@dataclass
class OriginRepoBuilder:
    """Helper class to build a throwaway origin repository for clone tests.

    Layout after build():
        master           README "Hello World!" -> "Hello World!\\n"
        test             CONTRIBUTING.md "## Contributing\\n"
        refs/tags/v1.0   first master commit
        refs/pull/1/merge README "Goodbye World!\\n"
    """

    path: Path
    commits: Dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        return str(self.path)

    def _commit(self, repo: Repo, name: str, files: Dict[str, str]) -> str:
        for rel_path, content in files.items():
            (self.path / rel_path).write_text(content)
        repo.index.add(list(files))
        sha = repo.index.commit(name).hexsha
        self.commits[name] = sha
        return sha

    def build(self) -> "OriginRepoBuilder":
        self.path.mkdir(parents=True, exist_ok=True)
        repo = Repo.init(self.path)
        repo.git.symbolic_ref("HEAD", "refs/heads/master")
        with repo.config_writer() as cw:
            cw.set_value("user", "name", "ciclone tests")
            cw.set_value("user", "email", "tests@ciclone.invalid")

        first = self._commit(repo, "first", {"README": "Hello World!"})
        repo.create_tag("v1.0", ref=first)
        self._commit(repo, "head", {"README": "Hello World!\n"})

        repo.git.checkout("-q", "-b", "test", first)
        self._commit(repo, "branch", {"CONTRIBUTING.md": "## Contributing\n"})

        repo.git.checkout("-q", "-b", "pr", first)
        pr = self._commit(repo, "pull", {"README": "Goodbye World!\n"})
        repo.git.update_ref("refs/pull/1/merge", pr)

        repo.git.checkout("-q", "master")
        logger.debug(f"Built origin repository at {self.path}: {self.commits}")
        return self
