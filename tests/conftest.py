from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from tests._fixtures.repo_builder import RepoBuilder

CommitsFileFactory = Callable[..., Path]


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Fake git checkout holding the changelog document and fragments."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def commits_file(repo_builder: RepoBuilder) -> CommitsFileFactory:
    """Write a release-host commit dump from ``(hash, message)`` pairs."""

    def _write(*commits: tuple[str, str]) -> Path:
        path = repo_builder.path() / "commits.json"
        payload = [{"hash": commit_hash, "message": message} for commit_hash, message in commits]
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
