"""Fold parsed commits and their fragments into changelog data."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Set

from .commits import classify, parse_commit
from .config import STRATEGY_FIRST_CATEGORY, STRATEGY_PER_COMMIT, validate_strategy
from .fragments import FragmentLoader
from .git.log import CommitSource
from .logging import get_logger
from .models import UNCATEGORIZED, ChangelogData, ChangelogEntry, Commit, Fragment, ParsedCommit

logger = get_logger("aggregate")


@dataclass
class AggregateResult:
    """Grouped entries plus the fragment files they consumed."""

    data: ChangelogData
    consumed: Set[Path] = field(default_factory=set)
    skipped_commits: int = 0


class Aggregator:
    """Groups commits into ``category -> component -> entries``.

    ``per_commit`` attaches the fragments a commit touched to that commit.
    ``first_category`` reproduces the release-host behaviour: every fragment
    in the directory is attributed to the first commit that has a category.
    """

    def __init__(
        self,
        loader: FragmentLoader,
        root: Path,
        fragment_dir: Path,
        *,
        strict: bool = False,
        strategy: str = STRATEGY_PER_COMMIT,
    ) -> None:
        self.loader = loader
        self.root = Path(root)
        self.fragment_dir = Path(fragment_dir)
        self.strict = strict
        self.strategy = validate_strategy(strategy)

    def aggregate(self, commits: Sequence[Commit], source: CommitSource) -> AggregateResult:
        result = AggregateResult(data=ChangelogData())
        if self.strategy == STRATEGY_FIRST_CATEGORY:
            self._aggregate_first_category(commits, result)
        else:
            self._aggregate_per_commit(commits, source, result)
        logger.debug(
            "Aggregated %d entries from %d commits (%d skipped, %d fragments)",
            result.data.entry_count(),
            len(commits),
            result.skipped_commits,
            len(result.consumed),
        )
        return result

    def _aggregate_per_commit(
        self,
        commits: Sequence[Commit],
        source: CommitSource,
        result: AggregateResult,
    ) -> None:
        for commit in commits:
            classified = self._classify(commit)
            if classified is None:
                result.skipped_commits += 1
                continue
            parsed, category = classified
            fragments = [
                fragment
                for fragment in self._fragments_for(commit, source)
                if fragment.path not in result.consumed
            ]
            self._add(result, category, parsed, fragments)

    def _aggregate_first_category(
        self,
        commits: Sequence[Commit],
        result: AggregateResult,
    ) -> None:
        pending: List[Fragment] = self.loader.load_directory(self.fragment_dir)
        for commit in commits:
            classified = self._classify(commit)
            if classified is None:
                result.skipped_commits += 1
                continue
            parsed, category = classified
            self._add(result, category, parsed, pending)
            pending = []

    def _classify(self, commit: Commit) -> tuple[ParsedCommit, str] | None:
        parsed = parse_commit(commit.message, strict=self.strict)
        if parsed is None:
            logger.debug("Dropping non-conventional commit %s", commit.hash[:8])
            return None
        category = classify(parsed, strict=self.strict)
        if category is None:
            logger.debug("Commit type '%s' is not rendered in strict mode", parsed.type)
            return None
        return parsed, category

    @staticmethod
    def _add(
        result: AggregateResult,
        category: str,
        parsed: ParsedCommit,
        fragments: Sequence[Fragment],
    ) -> None:
        component = parsed.scope or UNCATEGORIZED
        if not fragments:
            result.data.add(category, component, ChangelogEntry(subject=parsed.subject))
            return
        # The commit's category wins over anything the fragment might imply.
        for fragment in fragments:
            result.data.add(
                category,
                fragment.component or component,
                ChangelogEntry(subject=parsed.subject, content=fragment.content),
            )
            result.consumed.add(fragment.path)

    def _fragments_for(self, commit: Commit, source: CommitSource) -> List[Fragment]:
        if not commit.hash:
            return []
        candidates = []
        for relative in source.changed_files(commit.hash):
            path = self.root / relative
            if path.is_relative_to(self.fragment_dir) and self.loader.is_eligible(path):
                candidates.append(path)
        return self.loader.load_paths(candidates)


__all__ = ["AggregateResult", "Aggregator"]
