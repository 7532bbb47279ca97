"""Stage changelog updates for the release commit."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from ..logging import get_logger

logger = get_logger("git.stager")


class GitStager:
    """Runs ``git add`` for the document and any removed fragments.

    Staging is best effort: the document has already been written by the
    time this runs, so failures are reported and never raised.
    """

    def __init__(self, root: Path, runner: Callable[..., str] | None = None) -> None:
        self.root = Path(root)
        self._runner = runner or self._default_runner

    def stage(self, paths: Sequence[Path | str]) -> List[str]:
        """Stage ``paths`` and return the ones that could not be staged."""
        relative_paths = list(dict.fromkeys(self._to_relative(Path(path)) for path in paths))
        if not relative_paths:
            return []
        if not (self.root / ".git").exists():
            logger.warning("%s is not a Git repository; skipping staging", self.root)
            return relative_paths

        failed: List[str] = []
        for rel in relative_paths:
            try:
                # Adding a removed tracked path stages its deletion.
                self._run(["git", "add", "--", rel])
            except (subprocess.CalledProcessError, OSError) as exc:
                logger.warning("Could not stage %s: %s", rel, exc)
                failed.append(rel)
        if not failed:
            logger.info("Staged %d path(s) for the release commit", len(relative_paths))
        return failed

    def _to_relative(self, file_path: Path) -> str:
        try:
            return file_path.relative_to(self.root).as_posix()
        except ValueError:
            return file_path.as_posix()

    def _run(self, args: Iterable[str]) -> str:
        return self._runner(args, cwd=self.root)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""
