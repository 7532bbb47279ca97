"""Pipeline orchestration for the release, notes and upcoming flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, List, Optional

from .aggregate import Aggregator
from .commit_message import build_upcoming_block
from .config import VersionMdxConfig
from .fragments import FragmentLoader
from .git.log import CommitSource, GitCommitSource
from .git.stager import GitStager
from .logging import get_logger
from .postproc.markers import VersionDocument
from .postproc.render import ReleaseRenderer
from .release_notes import build_notes_block


@dataclass
class ReleaseOutcome:
    """Result of a document update."""

    path: Path
    version: str
    block: str
    deleted: List[Path] = field(default_factory=list)
    unstaged: List[str] = field(default_factory=list)
    dry_run: bool = False


def _utc_today() -> str:
    return datetime.now(UTC).date().isoformat()


class Orchestrator:
    """Coordinates commit collection, aggregation, rendering and persistence.

    Collaborators default to git-backed implementations rooted at the
    configured repository; tests inject doubles.
    """

    def __init__(
        self,
        source: CommitSource | None = None,
        loader: FragmentLoader | None = None,
        stager: GitStager | None = None,
        renderer: ReleaseRenderer | None = None,
        document: VersionDocument | None = None,
        clock: Callable[[], str] | None = None,
    ) -> None:
        self._source = source
        self._loader = loader
        self._stager = stager
        self._renderer = renderer
        self.document = document or VersionDocument()
        self._clock = clock or _utc_today
        self.logger = get_logger("orchestrator")

    def run_release(
        self,
        config: VersionMdxConfig,
        version: Optional[str],
        *,
        release_date: Optional[str] = None,
        dry_run: bool = False,
    ) -> ReleaseOutcome | None:
        """Build the release block from commits and fragments and persist it."""
        if not version:
            self.logger.info("No version found, skipping changelog generation")
            return None

        self.logger.info("Processing commits for changelog generation (version %s)", version)
        source = self._resolve_source(config)
        commits = source.commits()
        if not commits:
            self.logger.info("No commits found, leaving %s unchanged", config.document)
            return None

        aggregator = Aggregator(
            self._resolve_loader(config),
            config.root,
            config.fragment_dir,
            strict=config.strict,
            strategy=config.fragments.strategy,
        )
        result = aggregator.aggregate(commits, source)
        if result.data.is_empty():
            self.logger.info("No commits qualified for the changelog, leaving document unchanged")
            return None

        date = release_date or self._clock()
        block = self._resolve_renderer(config).render(version, date, result.data)
        consumed = sorted(result.consumed)
        return self._persist(config, version, block, consumed=consumed, dry_run=dry_run)

    def run_notes(
        self,
        config: VersionMdxConfig,
        version: Optional[str],
        notes: Optional[str],
        *,
        release_date: Optional[str] = None,
        dry_run: bool = False,
    ) -> ReleaseOutcome | None:
        """Reformat release-host notes and persist them as a release block."""
        if not version or not notes:
            self.logger.info("No version or release notes found, skipping document update")
            return None
        date = release_date or self._clock()
        block = build_notes_block(version, date, notes)
        return self._persist(config, version, block, consumed=[], dry_run=dry_run)

    def run_upcoming(self, config: VersionMdxConfig, version_content: str) -> ReleaseOutcome | None:
        """Record not-yet-released notes under an ``(Upcoming)`` heading."""
        path = config.document_path
        if not path.exists():
            self.logger.info("%s not found, skipping upcoming entry", config.document)
            return None
        block = build_upcoming_block(version_content)
        text = self.document.normalize(self.document.insert(self.document.read(path), block))
        self.document.write(path, text)
        unstaged = self._resolve_stager(config).stage([path])
        return ReleaseOutcome(path=path, version="Upcoming", block=block, unstaged=unstaged)

    # ------------------------------------------------------------------
    # Internals

    def _persist(
        self,
        config: VersionMdxConfig,
        version: str,
        block: str,
        *,
        consumed: List[Path],
        dry_run: bool,
    ) -> ReleaseOutcome:
        path = config.document_path
        updated = self.document.apply(self.document.read(path), version, block)

        if dry_run:
            return ReleaseOutcome(path=path, version=version, block=block, deleted=consumed, dry_run=True)

        self.document.write(path, updated)
        self.logger.info("Updated %s with changelog for version %s", config.document, version)

        deleted: List[Path] = []
        for fragment in consumed:
            try:
                fragment.unlink()
            except OSError as exc:
                self.logger.warning("Could not delete fragment %s: %s", fragment, exc)
                continue
            deleted.append(fragment)
            self.logger.info("Deleted processed fragment: %s", fragment)

        unstaged = self._resolve_stager(config).stage([path, *consumed])
        return ReleaseOutcome(
            path=path,
            version=version,
            block=block,
            deleted=deleted,
            unstaged=unstaged,
        )

    def _resolve_source(self, config: VersionMdxConfig) -> CommitSource:
        return self._source or GitCommitSource(config.root)

    def _resolve_loader(self, config: VersionMdxConfig) -> FragmentLoader:
        return self._loader or FragmentLoader(config.fragments.suffix)

    def _resolve_stager(self, config: VersionMdxConfig) -> GitStager:
        return self._stager or GitStager(config.root)

    def _resolve_renderer(self, config: VersionMdxConfig) -> ReleaseRenderer:
        if self._renderer is not None:
            return self._renderer
        return ReleaseRenderer(
            capitalize_components=config.render.capitalize_components,
            template_path=config.render.template,
        )


__all__ = ["Orchestrator", "ReleaseOutcome"]
