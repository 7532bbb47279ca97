"""Compose conventional-commit messages from structured answers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

COMMIT_TYPES: Dict[str, str] = {
    "feat": "A new feature",
    "fix": "A bug fix",
    "docs": "Documentation only changes",
    "style": "Changes that do not affect the meaning of the code",
    "refactor": "A code change that neither fixes a bug nor adds a feature",
    "perf": "A code change that improves performance",
    "test": "Adding missing tests or correcting existing tests",
    "build": "Changes that affect the build system or external dependencies",
    "ci": "Changes to our CI configuration files and scripts",
    "chore": "Other changes that don't modify src or test files",
    "revert": "Reverts a previous commit",
}

DEFAULT_SCOPES = ("Button", "Header", "Page", "CategoryTile", "storybook", "deps", "config")
BREAKING_ALLOWED = ("feat", "fix")
SUBJECT_LIMIT = 100
BREAKLINE_CHAR = "|"
VERSION_CONTENT_LABEL = "Version.mdx:"


class CommitMessageError(ValueError):
    """Raised when the supplied answers cannot form a valid commit message."""


@dataclass
class CommitAnswers:
    """Answers collected by the commit prompt."""

    type: str
    subject: str
    scope: Optional[str] = None
    body: Optional[str] = None
    version_content: Optional[str] = None
    breaking: Optional[str] = None
    footer: Optional[str] = None


def format_version_content(text: str) -> str:
    """Turn ``|``-separated input into trimmed, non-empty lines."""
    lines = text.replace(BREAKLINE_CHAR, "\n").split("\n")
    return "\n".join(line.strip() for line in lines if line.strip())


def build_commit_message(answers: CommitAnswers) -> str:
    """Return ``type(scope): subject`` followed by body and footers."""
    commit_type = answers.type.strip()
    if commit_type not in COMMIT_TYPES:
        allowed = ", ".join(COMMIT_TYPES)
        raise CommitMessageError(f"Unknown commit type '{commit_type}' (expected one of: {allowed})")

    subject = answers.subject.strip()
    if not subject:
        raise CommitMessageError("Subject is required")
    if len(subject) > SUBJECT_LIMIT:
        raise CommitMessageError(f"Subject exceeds {SUBJECT_LIMIT} characters")

    breaking = (answers.breaking or "").strip()
    if breaking and commit_type not in BREAKING_ALLOWED:
        raise CommitMessageError(
            f"Breaking changes are only recorded for: {', '.join(BREAKING_ALLOWED)}"
        )

    scope = (answers.scope or "").strip()
    header = f"{commit_type}({scope}): {subject}" if scope else f"{commit_type}: {subject}"

    body = (answers.body or "").replace(BREAKLINE_CHAR, "\n").strip()
    version_content = format_version_content(answers.version_content or "")
    if version_content:
        section = f"{VERSION_CONTENT_LABEL}\n{version_content}"
        body = f"{body}\n\n{section}" if body else section

    parts: List[str] = [header]
    if body:
        parts.append(body)
    if breaking:
        parts.append(f"BREAKING CHANGE: {breaking}")
    footer = (answers.footer or "").strip()
    if footer:
        parts.append(footer)
    return "\n\n".join(parts)


def build_upcoming_block(version_content: str) -> str:
    """Release block for changes that have not shipped yet."""
    content = format_version_content(version_content)
    return f"### Version (Upcoming)\n\n#### Released on: tbd\n\n{content}\n"


__all__ = [
    "BREAKING_ALLOWED",
    "COMMIT_TYPES",
    "CommitAnswers",
    "CommitMessageError",
    "DEFAULT_SCOPES",
    "build_commit_message",
    "build_upcoming_block",
    "format_version_content",
]
