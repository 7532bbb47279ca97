"""Tests for the conventional-commit message composer."""

from __future__ import annotations

import pytest

from versionmdx.commit_message import (
    CommitAnswers,
    CommitMessageError,
    build_commit_message,
    build_upcoming_block,
    format_version_content,
)


def test_build_commit_message_minimal() -> None:
    message = build_commit_message(CommitAnswers(type="fix", subject="correct spacing"))
    assert message == "fix: correct spacing"


def test_build_commit_message_full() -> None:
    answers = CommitAnswers(
        type="feat",
        scope="Button",
        subject="add loading state",
        body="Adds a spinner|and disables clicks",
        version_content="- **Button:** loading state | - **Button:** disabled while loading",
        breaking="onClick no longer fires while loading",
        footer="#31, #34",
    )

    assert build_commit_message(answers) == (
        "feat(Button): add loading state\n"
        "\n"
        "Adds a spinner\nand disables clicks\n"
        "\n"
        "Version.mdx:\n"
        "- **Button:** loading state\n"
        "- **Button:** disabled while loading\n"
        "\n"
        "BREAKING CHANGE: onClick no longer fires while loading\n"
        "\n"
        "#31, #34"
    )


def test_version_content_without_body_starts_the_body() -> None:
    message = build_commit_message(
        CommitAnswers(type="docs", subject="notes", version_content="line one|line two")
    )
    assert message == "docs: notes\n\nVersion.mdx:\nline one\nline two"


@pytest.mark.parametrize(
    "answers",
    [
        CommitAnswers(type="feature", subject="x"),
        CommitAnswers(type="feat", subject="   "),
        CommitAnswers(type="feat", subject="x" * 101),
        CommitAnswers(type="docs", subject="x", breaking="nope"),
    ],
)
def test_build_commit_message_rejects_invalid_answers(answers: CommitAnswers) -> None:
    with pytest.raises(CommitMessageError):
        build_commit_message(answers)


def test_format_version_content_drops_blank_lines() -> None:
    assert format_version_content(" a |  | b \n\n c") == "a\nb\nc"


def test_build_upcoming_block() -> None:
    assert build_upcoming_block("- **Page:** grid|- **Page:** gaps") == (
        "### Version (Upcoming)\n\n#### Released on: tbd\n\n- **Page:** grid\n- **Page:** gaps\n"
    )
