"""Tests for conventional-commit parsing."""

from __future__ import annotations

from versionmdx.commits.parser import parse_commit
from versionmdx.models import ParsedCommit


def test_parse_commit_extracts_type_scope_and_subject() -> None:
    parsed = parse_commit("feat(Button): add loading state")

    assert parsed == ParsedCommit(
        type="feat",
        scope="Button",
        breaking=False,
        subject="add loading state",
    )


def test_parse_commit_detects_bang_marker() -> None:
    parsed = parse_commit("refactor(Header)!: drop legacy layout")

    assert parsed is not None
    assert parsed.breaking is True
    assert parsed.scope == "Header"
    assert parsed.subject == "drop legacy layout"


def test_parse_commit_detects_breaking_token_in_body() -> None:
    parsed = parse_commit("fix: remove deprecated prop\n\nBREAKING CHANGE: prop X removed")

    assert parsed is not None
    assert parsed.type == "fix"
    assert parsed.scope is None
    assert parsed.breaking is True


def test_parse_commit_breaking_token_is_case_sensitive() -> None:
    parsed = parse_commit("fix: tweak\n\nbreaking change: not really")

    assert parsed is not None
    assert parsed.breaking is False


def test_parse_commit_only_reads_first_line() -> None:
    parsed = parse_commit("docs(readme): clarify setup\nsecond line: with colon")

    assert parsed is not None
    assert parsed.subject == "clarify setup"
    assert parsed.scope == "readme"


def test_parse_commit_permissive_fallback_for_free_text() -> None:
    parsed = parse_commit("Merge branch 'main' into feature\n\ndetails")

    assert parsed == ParsedCommit(
        type="other",
        scope=None,
        breaking=False,
        subject="Merge branch 'main' into feature",
    )


def test_parse_commit_strict_drops_free_text() -> None:
    assert parse_commit("Update things", strict=True) is None
