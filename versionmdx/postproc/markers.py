"""Sentinel-marker splicing for the persisted changelog document."""

from __future__ import annotations

import re
from pathlib import Path

MARKER = "{/* AUTO-GENERATED RELEASES WILL BE INSERTED HERE */}"
SKELETON = f"## Version history\n\n{MARKER}\n"

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_STABLE_VERSION = re.compile(r"^v?(\d+)\.(\d+)\.\d+$")


class MarkerError(RuntimeError):
    """Raised when the document does not contain exactly one marker."""


class PersistenceError(RuntimeError):
    """Raised when the changelog document cannot be written."""


class VersionDocument:
    """Reads, edits and writes the document that carries the marker."""

    marker = MARKER

    def read(self, path: Path) -> str:
        """Return the document text, or a fresh skeleton when it is missing."""
        if not path.exists():
            return SKELETON
        return path.read_text(encoding="utf-8")

    def write(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not write {path}: {exc}") from exc

    def apply(self, document: str, version: str, block: str) -> str:
        """Prune superseded betas, insert ``block`` and normalise blank lines."""
        pruned = self.prune_betas(document, version)
        return self.normalize(self.insert(pruned, block))

    def insert(self, document: str, block: str) -> str:
        """Place ``block`` directly below the marker, above older releases."""
        count = document.count(self.marker)
        if count != 1:
            raise MarkerError(
                f"Expected exactly one release marker in the document, found {count}"
            )
        if self.marker in block:
            raise MarkerError("Release block must not contain the release marker")
        pre, post = document.split(self.marker, 1)
        return f"{pre}{self.marker}\n\n{block.strip()}\n{post}"

    def prune_betas(self, document: str, version: str) -> str:
        """Drop ``X.Y.*-beta.*`` blocks once the stable ``X.Y.Z`` ships.

        A beta block runs until the next ``### Version`` heading. When none
        follows, everything up to the end of the document is removed with it.
        """
        match = _STABLE_VERSION.match(version.strip())
        if match is None:
            return document
        major, minor = match.groups()
        pattern = re.compile(
            rf"^### Version v?{major}\.{minor}\.[^\s-]+-beta\.[^\n]*.*?(?=^### Version |\Z)",
            re.MULTILINE | re.DOTALL,
        )
        return pattern.sub("", document)

    @staticmethod
    def normalize(document: str) -> str:
        collapsed = _EXCESS_BLANK_LINES.sub("\n\n", document)
        return collapsed.rstrip("\n") + "\n"


__all__ = ["MARKER", "SKELETON", "MarkerError", "PersistenceError", "VersionDocument"]
