"""Reformat semantic-release notes into the Version.mdx layout."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

FALLBACK_NOTES = "- Various improvements and bug fixes"
GENERAL_COMPONENT = "General"

_LEADING_TITLE = re.compile(r"^# .*?\n")
_COMMIT_REFERENCE = re.compile(r"\([a-f0-9]{7}\)")
_MARKDOWN_LINK = re.compile(r"\[.*?\]\(.*?\)")
_TICKET = re.compile(r"[A-Z]+-\d+")
_EMPTY_PARENS = re.compile(r"\(\s*\)")
_SECTION_SPLIT = re.compile(r"^### ", re.MULTILINE)
_SCOPED_ITEM = re.compile(r"^\* \*\*([^:*]+):\*\*\s*(.*)$")
_PLAIN_ITEM = re.compile(r"^\* (.+)$")


@dataclass
class _Component:
    name: str
    descriptions: List[str] = field(default_factory=list)

    def render(self) -> List[str]:
        if not self.descriptions:
            return []
        title = self.name[:1].upper() + self.name[1:]
        return [f"- **{title}:**", *(f"\t{desc}" for desc in self.descriptions), ""]


def is_prerelease(version: str) -> bool:
    return "-" in version


def is_beta(version: str) -> bool:
    return "-beta" in version


def clean_notes(text: str) -> str:
    """Strip headings, links, hashes and ticket ids from generated notes."""
    cleaned = _LEADING_TITLE.sub("", text, count=1)
    cleaned = _COMMIT_REFERENCE.sub("", cleaned)
    cleaned = _MARKDOWN_LINK.sub("", cleaned)
    cleaned = _TICKET.sub("", cleaned)
    cleaned = _EMPTY_PARENS.sub("", cleaned)
    return cleaned.strip()


def format_notes(text: str) -> str:
    """Convert ``### Section`` / ``* **scope:** text`` notes to MDX bullets."""
    cleaned = clean_notes(text)
    chunks = _SECTION_SPLIT.split(cleaned)
    # Anything before the first "### " heading is the version/date banner.
    if chunks and not cleaned.startswith("### "):
        chunks = chunks[1:]

    output: List[str] = []
    for chunk in chunks:
        lines = [line for line in chunk.split("\n") if line.strip()]
        if not lines:
            continue
        title = lines[0].strip()
        output.extend(["", f"### {title.upper()}", ""])
        breaking = "BREAKING" in title.upper()
        for component in _collect_components(lines[1:], breaking=breaking):
            output.extend(component.render())

    formatted = "\n".join(output).strip()
    return formatted or FALLBACK_NOTES


def build_notes_block(version: str, release_date: str, notes: str) -> str:
    """Wrap formatted notes in the release heading, labelling beta builds."""
    if is_beta(version):
        version_label = f"{version} (Beta - Testing)"
        date_label = f"{release_date} (Beta Testing Release)"
    else:
        version_label = version
        date_label = release_date
    body = format_notes(notes)
    return f"### Version {version_label}\n\n#### Released on: {date_label}\n\n{body}\n"


def _collect_components(lines: List[str], *, breaking: bool) -> List[_Component]:
    components: List[_Component] = []
    current: Optional[_Component] = None
    for raw in lines:
        line = raw.strip()
        scoped = _SCOPED_ITEM.match(line)
        if scoped:
            current = _Component(name=scoped.group(1).strip())
            components.append(current)
            inline = scoped.group(2).strip()
            if inline:
                if breaking and inline.startswith("- "):
                    inline = inline[2:]
                current.descriptions.append(f"- {inline}")
            continue
        plain = _PLAIN_ITEM.match(line)
        if plain and not raw.startswith(" "):
            current = _Component(name=GENERAL_COMPONENT)
            components.append(current)
            current.descriptions.append(f"- {plain.group(1).strip()}")
            continue
        if current is None:
            continue
        if line.startswith("- "):
            current.descriptions.append(line)
        elif raw.startswith("  "):
            # Indented commit body text from the prompt tool.
            current.descriptions.append(f"- {line}")
    return components


__all__ = [
    "FALLBACK_NOTES",
    "build_notes_block",
    "clean_notes",
    "format_notes",
    "is_beta",
    "is_prerelease",
]
