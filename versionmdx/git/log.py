"""Commit sources for the release window."""

from __future__ import annotations

import json
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from ..logging import get_logger
from ..models import Commit

FIELD_SEPARATOR = "|||"
RECORD_SEPARATOR = "\x1e"

logger = get_logger("git.log")


class CommitSource(ABC):
    """Supplies commits and the files each commit touched."""

    @abstractmethod
    def commits(self) -> List[Commit]:
        """Return commits for the current release window, newest first."""

    @abstractmethod
    def changed_files(self, commit_hash: str) -> List[str]:
        """Return repository-relative paths modified by ``commit_hash``."""


class StaticCommitSource(CommitSource):
    """Commits handed over by a release host instead of read from git."""

    def __init__(
        self,
        commits: Sequence[Commit],
        changed: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._commits = list(commits)
        self._changed = {key: list(value) for key, value in (changed or {}).items()}

    def commits(self) -> List[Commit]:
        return list(self._commits)

    def changed_files(self, commit_hash: str) -> List[str]:
        return list(self._changed.get(commit_hash, []))


class GitCommitSource(CommitSource):
    """Reads commits since the latest tag with ``git log``.

    Every git failure degrades to an empty result so the release can still
    produce best-effort notes.
    """

    def __init__(self, root: Path, runner: Callable[..., str] | None = None) -> None:
        self.root = Path(root)
        self._runner = runner or self._default_runner

    def commits(self) -> List[Commit]:
        if not (self.root / ".git").exists():
            logger.warning("%s is not a Git repository; no commits available", self.root)
            return []
        tag = self.last_tag()
        revision_range = f"{tag}..HEAD" if tag else "HEAD"
        args = [
            "git",
            "log",
            revision_range,
            f"--pretty=format:%H{FIELD_SEPARATOR}%s{FIELD_SEPARATOR}%b%x1e",
            "--no-merges",
        ]
        try:
            output = self._run(args)
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.info("Could not read commits (%s); continuing with none", exc)
            return []
        commits = parse_log_output(output)
        logger.debug("Read %d commits from %s", len(commits), revision_range)
        return commits

    def last_tag(self) -> Optional[str]:
        try:
            output = self._run(["git", "describe", "--tags", "--abbrev=0"])
        except (subprocess.CalledProcessError, OSError):
            return None
        tag = output.strip()
        return tag or None

    def changed_files(self, commit_hash: str) -> List[str]:
        args = ["git", "diff-tree", "--no-commit-id", "--name-only", "-r", commit_hash]
        try:
            output = self._run(args)
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.debug("diff-tree failed for %s: %s", commit_hash, exc)
            return []
        return [line.strip() for line in output.splitlines() if line.strip()]

    def _run(self, args: Iterable[str]) -> str:
        return self._runner(args, cwd=self.root, capture_output=True)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


def parse_log_output(output: str) -> List[Commit]:
    """Parse ``hash|||subject|||body`` records terminated by a record separator."""
    commits: List[Commit] = []
    for record in output.split(RECORD_SEPARATOR):
        record = record.strip()
        if not record:
            continue
        parts = record.split(FIELD_SEPARATOR, 2)
        if len(parts) < 2:
            continue
        commit_hash = parts[0].strip()
        subject = parts[1].strip()
        body = parts[2].strip() if len(parts) > 2 else ""
        message = f"{subject}\n\n{body}" if body else subject
        commits.append(Commit(hash=commit_hash, message=message))
    return commits


def load_commits_file(path: Path) -> List[Commit]:
    """Load a JSON list of ``{"hash", "message"}`` objects.

    semantic-release names the hash ``commit.long`` or ``hash`` depending on
    the plugin; both are accepted.
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("commits", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a list of commits")

    commits: List[Commit] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        message = item.get("message")
        if not isinstance(message, str) or not message.strip():
            continue
        commits.append(Commit(hash=_extract_hash(item), message=message))
    return commits


def _extract_hash(item: Mapping[str, object]) -> str:
    value = item.get("hash")
    if isinstance(value, str):
        return value
    nested = item.get("commit")
    if isinstance(nested, dict):
        long_hash = nested.get("long")
        if isinstance(long_hash, str):
            return long_hash
    if isinstance(nested, str):
        return nested
    return ""
