"""Fragment discovery and frontmatter parsing."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_FRAGMENT_SUFFIX
from .logging import get_logger
from .models import Fragment

FRONTMATTER_DELIMITER = "---"

logger = get_logger("fragments")


def parse_fragment(text: str) -> Tuple[Dict[str, str], str]:
    """Split ``text`` into frontmatter metadata and trimmed body content."""
    lines = text.replace("\r\n", "\n").split("\n")
    metadata: Dict[str, str] = {}
    content_start = 0

    if lines and lines[0] == FRONTMATTER_DELIMITER:
        index = 1
        while index < len(lines) and lines[index] != FRONTMATTER_DELIMITER:
            line = lines[index].strip()
            if ":" in line:
                key, value = line.split(":", 1)
                if key.strip():
                    metadata[key.strip()] = value.strip()
            index += 1
        content_start = index + 1

    content = "\n".join(lines[content_start:]).strip()
    return metadata, content


class FragmentLoader:
    """Reads fragment files, optionally in parallel, preserving input order."""

    def __init__(
        self,
        suffix: str = DEFAULT_FRAGMENT_SUFFIX,
        *,
        excluded: Sequence[str] = ("README.md",),
        max_workers: int = 4,
    ) -> None:
        self.suffix = suffix
        self._excluded = frozenset(excluded)
        self._max_workers = max(1, max_workers)

    def is_eligible(self, path: Path | str) -> bool:
        name = Path(path).name
        if name in self._excluded:
            return False
        return name.endswith(self.suffix)

    def load_directory(self, directory: Path) -> List[Fragment]:
        """Load every eligible fragment directly inside ``directory``."""
        if not directory.is_dir():
            logger.debug("Fragment directory %s does not exist", directory)
            return []
        candidates = sorted(
            path for path in directory.iterdir() if path.is_file() and self.is_eligible(path)
        )
        return self.load_paths(candidates)

    def load_paths(self, paths: Iterable[Path]) -> List[Fragment]:
        """Load the given files; unreadable ones are skipped."""
        ordered = [Path(path) for path in paths]
        if not ordered:
            return []
        if len(ordered) == 1 or self._max_workers == 1:
            results = [self._load_one(path) for path in ordered]
        else:
            workers = min(self._max_workers, len(ordered))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields in submission order regardless of completion order.
                results = list(pool.map(self._load_one, ordered))
        return [fragment for fragment in results if fragment is not None]

    @staticmethod
    def _load_one(path: Path) -> Optional[Fragment]:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable fragment %s: %s", path, exc)
            return None
        metadata, content = parse_fragment(text)
        component = metadata.get("component") or None
        return Fragment(path=path, component=component, content=content, metadata=metadata)


__all__ = ["FRONTMATTER_DELIMITER", "FragmentLoader", "parse_fragment"]
