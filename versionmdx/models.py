"""Core data models shared across versionmdx components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

BREAKING_CHANGES = "Breaking Changes"
FEATURES = "Features"
BUGFIXES = "Bugfixes"
IMPROVEMENTS = "Improvements"
OTHER = "Other"

CATEGORY_ORDER: Tuple[str, ...] = (
    BREAKING_CHANGES,
    FEATURES,
    BUGFIXES,
    IMPROVEMENTS,
    OTHER,
)

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class Commit:
    """A commit in the release window as reported by the commit source."""

    hash: str
    message: str


@dataclass(frozen=True)
class ParsedCommit:
    """Conventional-commit fields extracted from a commit subject."""

    type: str
    scope: Optional[str]
    breaking: bool
    subject: str


@dataclass(frozen=True)
class Fragment:
    """Freeform changelog text contributed alongside a change."""

    path: Path
    component: Optional[str]
    content: str
    metadata: Dict[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ChangelogEntry:
    """Either fragment content or a bare commit subject."""

    subject: Optional[str] = None
    content: Optional[str] = None

    def lines(self) -> List[str]:
        """Bullet texts: one per non-blank content line, else the subject."""
        if self.content and self.content.strip():
            return [line.strip() for line in self.content.splitlines() if line.strip()]
        return [self.subject or ""]


class ChangelogData:
    """Entries grouped by category, then component, in encounter order."""

    def __init__(self) -> None:
        self._groups: Dict[str, Dict[str, List[ChangelogEntry]]] = {
            category: {} for category in CATEGORY_ORDER
        }

    def add(self, category: str, component: str, entry: ChangelogEntry) -> None:
        if category not in self._groups:
            raise KeyError(f"Unknown changelog category: {category}")
        self._groups[category].setdefault(component, []).append(entry)

    def components(self, category: str) -> Dict[str, List[ChangelogEntry]]:
        return self._groups.get(category, {})

    def categories(self) -> Iterator[Tuple[str, Dict[str, List[ChangelogEntry]]]]:
        """Yield non-empty categories in rendering order."""
        for category in CATEGORY_ORDER:
            components = self._groups[category]
            if components:
                yield category, components

    def is_empty(self) -> bool:
        return not any(self._groups.values())

    def entry_count(self) -> int:
        return sum(
            len(entries)
            for components in self._groups.values()
            for entries in components.values()
        )

