"""Tests for the git stager."""

from __future__ import annotations

import subprocess
from pathlib import Path

from versionmdx.git.stager import GitStager


def _make_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".git").mkdir()
    return repo


def test_stager_adds_each_path_relative_to_root(tmp_path: Path) -> None:
    repo = _make_repo(tmp_path)
    calls = []

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        calls.append((list(args), Path(cwd)))
        return ""

    document = repo / "stories" / "01. Docs" / "Version.mdx"
    fragment = repo / "stories" / "01. Docs" / "fragments" / "a.mdx"
    failed = GitStager(repo, runner=runner).stage([document, fragment, document])

    assert failed == []
    assert calls == [
        (["git", "add", "--", "stories/01. Docs/Version.mdx"], repo),
        (["git", "add", "--", "stories/01. Docs/fragments/a.mdx"], repo),
    ]


def test_stager_reports_failures_without_raising(tmp_path: Path) -> None:
    repo = _make_repo(tmp_path)

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        if args[-1].endswith("gone.mdx"):
            raise subprocess.CalledProcessError(128, list(args))
        return ""

    failed = GitStager(repo, runner=runner).stage([repo / "Version.mdx", repo / "gone.mdx"])

    assert failed == ["gone.mdx"]


def test_stager_noop_without_git_repo(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        return ""

    failed = GitStager(tmp_path, runner=runner).stage([tmp_path / "Version.mdx"])

    assert not calls
    assert failed == ["Version.mdx"]
