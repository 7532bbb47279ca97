"""Tests for sentinel-marker splicing and beta pruning."""

from __future__ import annotations

from pathlib import Path

import pytest

from versionmdx.postproc.markers import MARKER, SKELETON, MarkerError, PersistenceError, VersionDocument

BETA_DOCUMENT = (
    "## Version history\n"
    "\n"
    f"{MARKER}\n"
    "\n"
    "### Version 2.3.0-beta.2 (Beta - Testing)\n"
    "\n"
    "#### Released on: 2026-10-02 (Beta Testing Release)\n"
    "\n"
    "- **Button:**\n"
    "\t- beta two\n"
    "\n"
    "### Version 2.3.0-beta.1\n"
    "\n"
    "- **Button:**\n"
    "\t- beta one\n"
    "\n"
    "### Version 2.2.1\n"
    "\n"
    "- **Page:**\n"
    "\t- stable\n"
    "\n"
    "### Version 2.2.0-beta.1\n"
    "\n"
    "\t- older beta\n"
)


def test_insert_places_block_directly_below_marker() -> None:
    document = f"# Docs\n\n{MARKER}\n\n### Version 1.0.0\n\nold\n"
    updated = VersionDocument().insert(document, "### Version 1.1.0\n\nnew\n")

    assert updated.index("### Version 1.1.0") < updated.index("### Version 1.0.0")
    assert updated.startswith(f"# Docs\n\n{MARKER}\n\n### Version 1.1.0")
    assert updated.count(MARKER) == 1


@pytest.mark.parametrize("document", ["# Docs\n", f"{MARKER}\n{MARKER}\n"])
def test_insert_requires_exactly_one_marker(document: str) -> None:
    with pytest.raises(MarkerError):
        VersionDocument().insert(document, "### Version 1.0.0\n")


def test_apply_rejects_block_that_carries_the_marker() -> None:
    block = f"### Version 2.3.0\n\n**Features**\n\n- **Header:**\n\t- {MARKER}\n"

    with pytest.raises(MarkerError):
        VersionDocument().apply(f"{MARKER}\n", "2.3.0", block)


def test_prune_removes_same_minor_betas_for_stable_release() -> None:
    pruned = VersionDocument().prune_betas(BETA_DOCUMENT, "2.3.0")

    assert "2.3.0-beta" not in pruned
    assert "### Version 2.2.1" in pruned
    assert "### Version 2.2.0-beta.1" in pruned
    assert MARKER in pruned


def test_prune_is_noop_for_prerelease() -> None:
    assert VersionDocument().prune_betas(BETA_DOCUMENT, "2.3.0-beta.3") == BETA_DOCUMENT


def test_prune_reaches_end_of_document() -> None:
    pruned = VersionDocument().prune_betas(BETA_DOCUMENT, "2.2.5")

    assert "2.2.0-beta.1" not in pruned
    assert "older beta" not in pruned
    assert "2.3.0-beta.2" in pruned


def test_prune_of_trailing_beta_runs_to_end_of_document() -> None:
    document = (
        f"{MARKER}\n\n"
        "### Version 2.2.0-beta.1\n\n- beta\n\n"
        "## Appendix\n\nmigration notes\n"
    )

    pruned = VersionDocument().prune_betas(document, "2.2.0")

    assert pruned == f"{MARKER}\n\n"


def test_apply_collapses_blank_lines_and_keeps_single_marker() -> None:
    document_model = VersionDocument()
    text = SKELETON
    for version in ("1.0.0-beta.1", "1.0.0", "1.1.0"):
        text = document_model.apply(text, version, f"### Version {version}\n\n\n\nbody\n")
        assert text.count(MARKER) == 1
        assert "\n\n\n" not in text

    assert "1.0.0-beta.1" not in text
    assert text.index("### Version 1.1.0") < text.index("### Version 1.0.0")


def test_read_missing_document_returns_skeleton(tmp_path: Path) -> None:
    assert VersionDocument().read(tmp_path / "Version.mdx") == SKELETON


def test_write_failure_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(PersistenceError):
        VersionDocument().write(blocker / "Version.mdx", "text")
