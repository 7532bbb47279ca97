"""Helper utilities for constructing temporary repositories in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from versionmdx.config import DEFAULT_DOCUMENT, DEFAULT_FRAGMENT_DIR, VersionMdxConfig, load_config
from versionmdx.postproc.markers import MARKER


class RepoBuilder:
    """Writes documents, fragments and config into a fake git checkout."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self.root = self.root.resolve()
        (self.root / ".git").mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the repository."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_document(self, releases: str = "") -> Path:
        """Create the changelog document with the marker and optional releases."""
        text = f"## Version history\n\n{MARKER}\n"
        if releases:
            text += "\n" + textwrap.dedent(releases).lstrip("\n")
        path = self.root / DEFAULT_DOCUMENT
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def write_fragment(self, name: str, content: str) -> str:
        """Write a fragment and return its repository-relative path."""
        relative = f"{DEFAULT_FRAGMENT_DIR}/{name}"
        self.write({relative: content})
        return relative

    def document(self) -> str:
        return (self.root / DEFAULT_DOCUMENT).read_text(encoding="utf-8")

    def config(self) -> VersionMdxConfig:
        return load_config(self.root)

    def path(self) -> Path:
        """Return the repository root path."""
        return self.root


__all__ = ["RepoBuilder"]
