"""Conventional-commit subject parsing."""

from __future__ import annotations

import re
from typing import Optional

from ..models import ParsedCommit

CONVENTIONAL_PATTERN = re.compile(r"^(\w+)(\([^)]+\))?(!)?:\s*(.+)$")
BREAKING_TOKEN = "BREAKING CHANGE:"
FALLBACK_TYPE = "other"


def parse_commit(message: str, *, strict: bool = False) -> Optional[ParsedCommit]:
    """Extract ``type(scope)!: subject`` from the first line of ``message``.

    Subjects that do not follow the convention are dropped in strict mode and
    kept as ``type="other"`` otherwise.
    """
    first_line = message.partition("\n")[0].strip()

    match = CONVENTIONAL_PATTERN.match(first_line)
    if match is None:
        if strict:
            return None
        return ParsedCommit(
            type=FALLBACK_TYPE,
            scope=None,
            breaking=False,
            subject=first_line,
        )

    commit_type, scope_with_parens, bang, subject = match.groups()
    scope = scope_with_parens[1:-1] if scope_with_parens else None
    breaking = bang is not None or BREAKING_TOKEN in message
    return ParsedCommit(
        type=commit_type,
        scope=scope,
        breaking=breaking,
        subject=subject.strip(),
    )
