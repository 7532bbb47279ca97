"""Map parsed commits onto changelog categories."""

from __future__ import annotations

from typing import Mapping, Optional

from ..models import BREAKING_CHANGES, BUGFIXES, FEATURES, IMPROVEMENTS, OTHER, ParsedCommit

_STRICT_TYPES: Mapping[str, str] = {
    "feat": FEATURES,
    "fix": BUGFIXES,
}

_IMPROVEMENT_TYPES = frozenset({"perf", "refactor", "style", "docs", "test", "chore"})


def classify(parsed: ParsedCommit, *, strict: bool = False) -> Optional[str]:
    """Return the category for ``parsed`` or ``None`` when it is not rendered."""
    if parsed.breaking:
        return BREAKING_CHANGES
    category = _STRICT_TYPES.get(parsed.type)
    if category is not None or strict:
        return category
    if parsed.type in _IMPROVEMENT_TYPES:
        return IMPROVEMENTS
    return OTHER
