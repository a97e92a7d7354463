"""Git integration helpers."""

import base64
import os
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..models.types import StatusSnapshot
from ..utils.config import GitConfig
from ..utils.errors import GitCommandError
from ..utils.logger import Logger

# Porcelain v1 XY codes for unmerged paths.
CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


def _redact(args: Iterable[str]) -> List[str]:
    return [
        "http.extraHeader=<redacted>" if a.startswith("http.extraHeader=") else a
        for a in args
    ]


def parse_porcelain_status(output: str) -> StatusSnapshot:
    """Parse ``git status --porcelain=v1 -z`` output into a snapshot."""
    untracked, modified, conflicting = set(), set(), set()
    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        code, path = entry[:2], entry[3:]
        if code[0] in "RC":
            # Source path of a rename/copy follows as its own entry
            i += 1
        if code == "??":
            untracked.add(path)
        elif code in CONFLICT_CODES:
            conflicting.add(path)
        elif code[1] == "M":
            modified.add(path)
    return StatusSnapshot(
        untracked=frozenset(untracked),
        modified=frozenset(modified),
        conflicting=frozenset(conflicting),
    )


class GitIntegration:
    """Handle on one git working tree; every call runs the git executable."""

    def __init__(self, repo_path: Union[str, Path] = ".", config: Optional[GitConfig] = None):
        self.repo_path = Path(repo_path).absolute()
        self.config = config or GitConfig()

    def __repr__(self) -> str:
        return f"GitIntegration({str(self.repo_path)!r})"

    def _identity_options(self) -> List[str]:
        options = []
        if self.config.author_name:
            options += ["-c", f"user.name={self.config.author_name}"]
        if self.config.author_email:
            options += ["-c", f"user.email={self.config.author_email}"]
        return options

    def run(
        self,
        *args: str,
        options: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[Path] = None
    ) -> str:
        """Run a git subcommand and return its stdout."""
        cmd = [self.config.executable, *(options or []), *args]
        Logger.debug("Running %s", " ".join(_redact(cmd)))

        run_env = None
        if env:
            run_env = os.environ.copy()
            run_env.update(env)

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd or self.repo_path,
                env=run_env,
                capture_output=True,
                text=True,
                check=True
            )
        except subprocess.CalledProcessError as e:
            # CalledProcessError is not chained: its repr carries the unredacted command
            raise GitCommandError(_redact(cmd), e.returncode, e.stderr or e.stdout or "") from None
        except OSError as e:
            raise GitCommandError(_redact(cmd), cause=e)
        return result.stdout

    @classmethod
    def init(cls, path: Union[str, Path], config: Optional[GitConfig] = None) -> 'GitIntegration':
        """Create a repository at path, making missing directories."""
        target = Path(path).absolute()
        target.mkdir(parents=True, exist_ok=True)
        repo = cls(target, config)
        repo.run("init", str(target))
        return repo

    @classmethod
    def open(cls, path: Union[str, Path], config: Optional[GitConfig] = None) -> 'GitIntegration':
        """Return a handle for the repository containing path.

        The handle is bound to the work tree root, since status reports
        root-relative paths.
        """
        candidate = cls(path, config)
        if not candidate.repo_path.is_dir():
            raise GitCommandError(
                ["rev-parse"],
                cause=FileNotFoundError(f"repository not found: {candidate.repo_path}")
            )
        toplevel = candidate.run("rev-parse", "--show-toplevel").strip()
        return cls(toplevel, config)

    def add(self, paths: Iterable[str]) -> None:
        """Add paths to the index."""
        self.run("add", "--", *paths)

    def commit(self, message: str) -> str:
        """Commit the index and return the new HEAD sha."""
        self.run("commit", "-m", message, options=self._identity_options())
        return self.head()

    def head(self) -> Optional[str]:
        """Get the HEAD commit sha, or None before the first commit."""
        try:
            return self.run("rev-parse", "--verify", "-q", "HEAD").strip() or None
        except GitCommandError:
            return None

    def commit_count(self) -> int:
        """Number of commits reachable from HEAD."""
        if self.head() is None:
            return 0
        return int(self.run("rev-list", "--count", "HEAD").strip())

    def push(self, remote_url: str, token: str) -> None:
        """Push the current branch with an empty username and the token as password."""
        credentials = base64.b64encode(f":{token}".encode("utf-8")).decode("ascii")
        self.run(
            "push", remote_url, "HEAD",
            options=["-c", f"http.extraHeader=Authorization: Basic {credentials}"],
            env={"GIT_TERMINAL_PROMPT": "0"}
        )

    def status(self) -> StatusSnapshot:
        """Read the full working tree status."""
        output = self.run("status", "--porcelain=v1", "-z", "--untracked-files=all")
        return parse_porcelain_status(output)

    def checkout_stage(self, path: str, side: str) -> None:
        """Overwrite a conflicted path with one merge side ('ours' or 'theirs')."""
        if side not in ("ours", "theirs"):
            raise ValueError(f"Unknown checkout side: {side}")
        self.run("checkout", f"--{side}", "--", path)
